"""
Client for the vision service that turns a diagram image into CREATE TABLE SQL.

The service is an OpenAI-compatible chat completions endpoint. Its output
is free-form text that is fed to the regular parser; nothing here assumes
the model follows the conventions requested in the prompt.
"""
import logging
import re

import requests

from ..src.exceptions import VisionServiceError, VisionNotConfiguredError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an expert in databases and data modeling.

The user will send an image of a mind map, conceptual diagram, schema or drawing showing entities and their relationships.

Analyze the image and generate the matching SQL CREATE TABLE statements.

RULES:
1. Identify every entity (table) visible in the image
2. For each entity, infer sensible columns from the context
3. Always add an 'id' UUID column as the primary key
4. Add 'created_at' TIMESTAMPTZ to the main tables
5. Create foreign keys for the relationships you identify
6. Use PostgreSQL types (UUID, TEXT, INTEGER, DECIMAL, BOOLEAN, TIMESTAMPTZ, ...)
7. Add NOT NULL constraints where it makes sense

CONVENTIONS:
- Table names in plural snake_case (users, products, orders)
- Column names in snake_case
- Foreign keys named {singular_table}_id (e.g. user_id, product_id)
- Create a junction table for many-to-many relationships

RETURN ONLY the SQL code, without explanations or markdown."""

USER_PROMPT = ("Analyze this image and generate the SQL CREATE TABLE code for the matching "
               "database. Identify the entities, their attributes and the relationships between them.")

_CODE_FENCE_RE = re.compile(r'```(?:sql)?[ \t]*\n?', re.IGNORECASE)


def clean_sql_response(content: str) -> str:
    """Strip markdown code fences the model may wrap around the SQL"""
    return _CODE_FENCE_RE.sub('', content or '').strip()


class VisionClient:
    """Sends an image to the vision model and returns the SQL it writes"""

    def __init__(self, api_key: str, api_url: str, model: str = 'gpt-4o',
                 timeout: int = 90, max_tokens: int = 4096, temperature: float = 0.2):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, image: str) -> dict:
        """Chat completion request for a data URL or http(s) image URL"""
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "system",
                    "content": SYSTEM_PROMPT
                },
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": USER_PROMPT},
                        {"type": "image_url", "image_url": {"url": image, "detail": "high"}}
                    ]
                }
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature
        }

    def image_to_sql(self, image: str) -> str:
        """
        Ask the vision model for DDL describing ``image``.

        Raises:
            VisionNotConfiguredError: no API key is set
            VisionServiceError: transport failure, non-200 status or malformed body
        """
        if not self.is_configured:
            raise VisionNotConfiguredError("Vision service API key is not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}"
        }

        try:
            response = requests.post(self.api_url, headers=headers,
                                     json=self.build_payload(image), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Vision service request failed: {e}")
            raise VisionServiceError(f"Vision service unreachable: {e}") from e

        if response.status_code != 200:
            logger.error(f"Vision service call failed: {response.status_code} - {response.text}")
            raise VisionServiceError(f"Vision service returned HTTP {response.status_code}",
                                     status_code=response.status_code)

        try:
            content = response.json()['choices'][0]['message']['content']
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected vision service response: {e}")
            raise VisionServiceError("Vision service returned an unexpected response") from e

        sql = clean_sql_response(content)
        logger.info(f"Vision service returned {len(sql)} characters of SQL")
        return sql
