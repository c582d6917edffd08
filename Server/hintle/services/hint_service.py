"""
Hint Service

Looks up a dictionary definition for the round's target word. A missing
definition is a normal outcome: the round simply starts without a hint.
"""

from typing import Optional

import requests

from ..utils.game_logger import game_logger


class HintService:
    """Thin client for a dictionaryapi.dev-style definitions endpoint."""

    def __init__(self, api_url: str, timeout: float = 5.0):
        self.api_url = api_url
        self.timeout = timeout

    def fetch_definition(self, word: str) -> Optional[str]:
        """
        Fetch the first definition of the first meaning of ``word``.

        Returns:
            The definition text, or None when unavailable
        """
        url = f"{self.api_url}{word.lower()}"
        try:
            response = requests.get(url, timeout=self.timeout)
            if not response.ok:
                game_logger.logger.info(
                    f"No definition for {word}: HTTP {response.status_code}"
                )
                return None
            data = response.json()
        except requests.RequestException as e:
            game_logger.logger.warning(f"Definition lookup failed for {word}: {e}")
            return None
        except ValueError as e:
            game_logger.logger.warning(f"Definition payload for {word} is not JSON: {e}")
            return None

        return self._extract_definition(data)

    @staticmethod
    def _extract_definition(data) -> Optional[str]:
        try:
            definition = data[0]["meanings"][0]["definitions"][0]["definition"]
        except (IndexError, KeyError, TypeError):
            return None
        if not isinstance(definition, str) or not definition.strip():
            return None
        return definition.strip()
