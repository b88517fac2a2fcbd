"""
Document Field Extractor Service

Turns the raw text of an uploaded document into a flat field map
(``name``, ``dateOfBirth``, ``percentage`` ...) that the verifier checks
against the application.

Two strategies:
  - LLMExtractor: document-type specific prompt sent to the configured
    LangChain chat model, output validated against a per-type schema.
  - RuleBasedExtractor: ordered regex patterns, deterministic and always
    available.

DocumentExtractor tries the remote strategy first and silently falls back
to the rules on any failure. Extraction never raises to its caller.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Pattern, Tuple

from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError as SchemaValidationError

from app.core.config import settings
from app.core.errors import ExternalServiceError
from app.schemas.extraction import schema_for
from app.schemas.verification import ApplicantContext
from app.services.llm_client import get_chat_model

logger = logging.getLogger(__name__)

PROMPT_TEXT_LIMIT = 2000

_NAME_TOKENS = r"([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)+)"  # words on one line
_DATE_TOKEN = r"(\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4})"


class RuleBasedExtractor:
    """
    Pattern-matching extractor.

    Each field has an ordered list of candidate patterns; the first pattern
    that matches wins. A field with no match is left out of the result.
    """

    NAME_PATTERNS: List[Pattern] = [
        re.compile(r"Name(?!\s+of\b)[:\s]+" + _NAME_TOKENS, re.IGNORECASE),
        re.compile(r"Name of Candidate[:\s]+" + _NAME_TOKENS, re.IGNORECASE),
        re.compile(r"Candidate Name[:\s]+" + _NAME_TOKENS, re.IGNORECASE),
    ]
    DOB_PATTERNS: List[Pattern] = [
        re.compile(r"Date of Birth[:\s]+" + _DATE_TOKEN, re.IGNORECASE),
        re.compile(r"DOB[:\s]+" + _DATE_TOKEN, re.IGNORECASE),
        re.compile(r"Born[:\s]+" + _DATE_TOKEN, re.IGNORECASE),
    ]
    PERCENTAGE_PATTERN = re.compile(r"(\d+\.?\d*)\s*%")
    BOARD_PATTERN = re.compile(r"Board[:\s]+([A-Z]+)", re.IGNORECASE)
    AADHAR_PATTERN = re.compile(r"\b\d{4}[ \t]*\d{4}[ \t]*\d{4}\b")

    @staticmethod
    def _first_group(patterns: List[Pattern], text: str) -> Optional[str]:
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                return match.group(1).strip()
        return None

    def extract(self, document_type: str, text: str) -> Dict[str, Any]:
        extracted: Dict[str, Any] = {}
        text = text or ""
        doc_type = (document_type or "").lower()

        name = self._first_group(self.NAME_PATTERNS, text)
        if name:
            extracted["name"] = name

        dob = self._first_group(self.DOB_PATTERNS, text)
        if dob:
            extracted["dateOfBirth"] = dob

        if "marksheet" in doc_type:
            match = self.PERCENTAGE_PATTERN.search(text)
            if match:
                extracted["percentage"] = float(match.group(1))

            board = self._first_group([self.BOARD_PATTERN], text)
            if board:
                extracted["board"] = board

        if "aadhar" in doc_type:
            match = self.AADHAR_PATTERN.search(text)
            if match:
                extracted["aadharNumber"] = re.sub(r"\s", "", match.group(0))

        return extracted


_MARKSHEET_PROMPT = """Extract the following information from this {level} marksheet text:
- Student Name
- Date of Birth
- Percentage/CGPA
- Board Name
- Roll Number
- Year of Passing

Text: {{text}}

Return JSON format: {{{{"name": "...", "dateOfBirth": "...", "percentage": ..., "board": "...", "rollNumber": "...", "year": "..."}}}}"""

PROMPT_TEMPLATES: Dict[str, str] = {
    "10th Marksheet": _MARKSHEET_PROMPT.format(level="10th"),
    "12th Marksheet": _MARKSHEET_PROMPT.format(level="12th"),
    "Aadhar Card": """Extract the following information from this Aadhar card text:
- Name
- Date of Birth
- Aadhar Number (last 4 digits only)
- Address

Text: {text}

Return JSON format: {{"name": "...", "dateOfBirth": "...", "aadharLast4": "...", "address": "..."}}""",
    "Graduation Certificate": """Extract the following information from this graduation certificate:
- Student Name
- Degree Name
- University Name
- Year of Graduation
- CGPA/Percentage

Text: {text}

Return JSON format: {{"name": "...", "degree": "...", "university": "...", "year": "...", "cgpa": "..."}}""",
}

DEFAULT_PROMPT = "Extract key information from this {document_type} document. Text: {text}"

SYSTEM_PROMPT = "You are an expert at extracting structured data from documents. Return only valid JSON."


def _strip_code_fence(content: str) -> str:
    """Remove a surrounding markdown code block, if the model added one."""
    result_text = content.strip()
    if result_text.startswith("```"):
        result_text = result_text.split("```")[1]
        if result_text.startswith("json"):
            result_text = result_text[4:]
    if result_text.endswith("```"):
        result_text = result_text[:-3]
    return result_text.strip()


class LLMExtractor:
    """
    Remote structured extraction through the configured chat model.

    Every failure is raised as ExternalServiceError; the caller decides
    what to fall back to.
    """

    def __init__(self, provider: Optional[str] = None):
        self.provider = provider

    def build_prompt(self, document_type: str) -> ChatPromptTemplate:
        template = PROMPT_TEMPLATES.get(document_type, DEFAULT_PROMPT)
        return ChatPromptTemplate.from_messages([
            ("system", SYSTEM_PROMPT),
            ("human", template),
        ])

    def extract(self, document_type: str, text: str) -> Dict[str, Any]:
        if not settings.EXTRACTION_LLM_ENABLED:
            raise ExternalServiceError("Remote extraction disabled")

        model = get_chat_model(self.provider, temperature=0.1)
        chain = self.build_prompt(document_type) | model

        try:
            response = chain.invoke({
                "text": (text or "")[:PROMPT_TEXT_LIMIT],
                "document_type": document_type,
            })
        except Exception as e:
            raise ExternalServiceError(f"Extraction call failed: {e}") from e

        content = response.content if isinstance(response.content, str) else str(response.content)
        try:
            data = json.loads(_strip_code_fence(content))
        except json.JSONDecodeError as e:
            raise ExternalServiceError(f"Failed to parse AI response: {e}") from e

        if not isinstance(data, dict):
            raise ExternalServiceError("AI response is not a JSON object")

        schema = schema_for(document_type)
        if schema is None:
            fields = data
        else:
            try:
                fields = schema.model_validate(data).to_field_map()
            except SchemaValidationError as e:
                raise ExternalServiceError(f"AI response does not match {document_type} schema: {e}") from e

        # an object with none of the expected keys ({"error": ...}) is not an extraction
        if not fields:
            raise ExternalServiceError(f"AI response has no {document_type} fields")
        return fields


class DocumentExtractor:
    """
    Extraction with silent fallback.

    The remote strategy is optional and injectable; when it is absent or
    fails, the rule-based result is returned instead.
    """

    def __init__(self, remote: Optional[LLMExtractor] = None, fallback: Optional[RuleBasedExtractor] = None):
        self.remote = remote
        self.fallback = fallback or RuleBasedExtractor()

    def extract(
        self,
        document_type: str,
        raw_text: str,
        applicant_context: Optional[ApplicantContext] = None,
    ) -> Dict[str, Any]:
        return self.extract_with_source(document_type, raw_text, applicant_context)[0]

    def extract_with_source(
        self,
        document_type: str,
        raw_text: str,
        applicant_context: Optional[ApplicantContext] = None,
    ) -> Tuple[Dict[str, Any], str]:
        """Same as ``extract`` but also reports which strategy produced the map."""
        if self.remote is not None:
            try:
                return self.remote.extract(document_type, raw_text), "llm"
            except ExternalServiceError as e:
                logger.info(f"Remote extraction unavailable for '{document_type}', using rules: {e.message}")
            except Exception as e:
                logger.warning(f"Remote extraction failed for '{document_type}', using rules: {e}")

        return self.fallback.extract(document_type, raw_text), "rules"


# Singleton instance
document_extractor = DocumentExtractor(remote=LLMExtractor())
