import logging
from typing import Optional

from openai import OpenAI

from sampleflow.config import OpenAIConfig
from sampleflow.models.analysis import NegotiationAnalysis
from sampleflow.services.fallbacks import (
    default_negotiation_analysis,
    default_negotiation_template,
)
from sampleflow.services.identification import build_openai_client, extract_json_object
from sampleflow.telemetry import emit_fallback_telemetry

LICENSING_EXPERT = "You are a music licensing expert who helps artists clear samples."


class NegotiationAssistant:
    """
    Drafts clearance requests and reads rights-holder replies.
    Falls back to fixed text when the language model is unavailable.
    """

    def __init__(self, config: Optional[OpenAIConfig] = None, client: Optional[OpenAI] = None):
        self.logger = logging.getLogger("sampleflow.services.negotiation")
        self.config = config or OpenAIConfig.from_env()
        if client is not None:
            self.client = client
        else:
            try:
                self.client = build_openai_client(self.config)
            except Exception as e:
                self.logger.error(f"OpenAI client init failed: {e}")
                self.client = None

    def _complete(self, prompt: str, temperature: float) -> str:
        response = self.client.chat.completions.create(
            model=self.config.model,
            messages=[
                {"role": "system", "content": LICENSING_EXPERT},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            max_tokens=1000,
        )
        return response.choices[0].message.content.strip()

    def generate_negotiation_template(
        self,
        project_name: str,
        sample_info: str,
        rights_holder: str,
        purpose: str,
    ) -> str:
        if self.client is None:
            emit_fallback_telemetry("negotiation")
            return default_negotiation_template(project_name, sample_info, rights_holder, purpose)

        prompt = (
            "Generate a professional email template for requesting sample clearance "
            "with the following details:\n"
            f"- Project/Track Name: {project_name}\n"
            f"- Sample Information: {sample_info}\n"
            f"- Rights Holder: {rights_holder}\n"
            f"- Intended Use: {purpose}\n\n"
            "The email should be polite, professional, and include all necessary information "
            "for the rights holder to make a decision.\n"
            "It should also include placeholders for specific offer terms."
        )

        try:
            template = self._complete(prompt, temperature=0.7)
            if not template:
                raise ValueError("Empty completion")
            return template
        except Exception as e:
            self.logger.error(f"Template generation error: {type(e).__name__}: {e}")
            emit_fallback_telemetry("negotiation", e)
            return default_negotiation_template(project_name, sample_info, rights_holder, purpose)

    def analyze_negotiation_response(self, response_text: str) -> NegotiationAnalysis:
        if self.client is None or not response_text or not response_text.strip():
            emit_fallback_telemetry("negotiation")
            return default_negotiation_analysis()

        prompt = (
            "Analyze the following response from a rights holder regarding sample clearance:\n\n"
            f'"{response_text}"\n\n'
            "Provide an analysis with:\n"
            "1. The sentiment (positive, neutral, or negative)\n"
            "2. Suggested next steps\n"
            "3. A draft reply that addresses any concerns or questions\n\n"
            "Format your response as JSON:\n"
            "{\n"
            '  "sentiment": "positive|neutral|negative",\n'
            '  "nextSteps": "Detailed next steps",\n'
            '  "suggestedReply": "Draft reply text"\n'
            "}"
        )

        try:
            return NegotiationAnalysis.from_dict(
                extract_json_object(self._complete(prompt, temperature=0.3))
            )
        except Exception as e:
            self.logger.error(f"Negotiation analysis error: {type(e).__name__}: {e}")
            emit_fallback_telemetry("negotiation", e)
            return default_negotiation_analysis()
