# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
AI Word Generator using Claude API.

Requests themed quartile words from the Anthropic Messages API. The reply
is returned as raw text; parsing and validation happen in response_parser.
"""

import logging
import os
from typing import Dict, Optional, Tuple

import anthropic

from prompt_loader import PromptLoader, PromptRenderError

DEFAULT_MODEL = "claude-sonnet-4-20250514"
PROMPT_NAME = "theme_words"


class AIWordGenerator:
    """
    Generates theme words using Claude API.

    Features:
    - Theme word requests shaped for 4-chunk splitting
    - External prompt templates with inline fallback
    - Usage statistics
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        prompt_loader: Optional[PromptLoader] = None,
        logger: Optional[logging.Logger] = None,
        client: Optional[object] = None
    ):
        """
        Initialize the AI word generator.

        Args:
            api_key: Anthropic API key (or set ANTHROPIC_API_KEY env var)
            model: Claude model to use
            prompt_loader: Optional PromptLoader for external prompts
            logger: Logger instance (uses module logger if not provided)
            client: Pre-built client, mainly for tests
        """
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model
        self.prompt_loader = prompt_loader
        self.logger = logger if logger else logging.getLogger(__name__)

        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key)
        else:
            self.client = None

        self.stats = {
            "api_calls": 0,
            "failures": 0,
            "tokens_used": 0,
        }

    def is_available(self) -> bool:
        """Check if AI generation is available."""
        return self.client is not None

    def _make_request(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 1024,
        temperature: float = 0.7,
        model: Optional[str] = None
    ) -> Optional[str]:
        """
        Make an API request.

        Returns:
            Response text or None if the call failed
        """
        if not self.client:
            return None

        try:
            self.stats["api_calls"] += 1

            response = self.client.messages.create(
                model=model or self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}]
            )

            text = response.content[0].text

            tokens = response.usage.input_tokens + response.usage.output_tokens
            self.stats["tokens_used"] += tokens

            return text

        except Exception as e:
            self.stats["failures"] += 1
            self.logger.error(f"AI request error: {e}", exc_info=True)
            return None

    def request_theme_words(
        self,
        theme: str,
        min_length: int = 8,
        max_length: int = 12,
        word_count: int = 5
    ) -> Optional[str]:
        """
        Ask the model for themed quartile words.

        Args:
            theme: Topic for the words (e.g., "Space")
            min_length: Minimum letters requested per word
            max_length: Maximum letters requested per word
            word_count: Number of words requested

        Returns:
            Raw response text, or None if the request failed
        """
        max_tokens = 1024
        temperature = 0.7
        model = None

        if self.prompt_loader:
            try:
                template = self.prompt_loader.get(PROMPT_NAME)
                system_prompt, user_prompt = template.render(
                    theme=theme,
                    min_length=min_length,
                    max_length=max_length,
                    word_count=word_count,
                )
                max_tokens = template.max_tokens
                temperature = template.temperature
                model = template.model
            except (KeyError, PromptRenderError) as e:
                self.logger.warning(f"Prompt template unusable, using inline prompt: {e}")
                system_prompt, user_prompt = self._build_theme_prompts(
                    theme, min_length, max_length, word_count
                )
        else:
            system_prompt, user_prompt = self._build_theme_prompts(
                theme, min_length, max_length, word_count
            )

        self.logger.debug(f"Requesting {word_count} words for theme '{theme}'")
        return self._make_request(
            system_prompt,
            user_prompt,
            max_tokens=max_tokens,
            temperature=temperature,
            model=model
        )

    def _build_theme_prompts(
        self,
        theme: str,
        min_length: int,
        max_length: int,
        word_count: int
    ) -> Tuple[str, str]:
        """Build theme word prompts."""
        system_prompt = f"""You are a word game assistant. Generate exactly {word_count} themed words,
each {min_length}-{max_length} letters long, split into 4 meaningful chunks.
Return only a JSON object, no other text."""

        user_prompt = f"""Theme: "{theme}"
Format your response exactly like this, with {word_count} words:
{{
  "theme": "{theme}",
  "words": [
    {{"word": "QUARTERBACK", "chunks": ["QUAR", "TER", "BA", "CK"]}}
  ]
}}

Requirements:
- Each word MUST be {min_length}-{max_length} letters (count carefully)
- Each word must be split into exactly 4 chunks of at least 2 letters
- Words must be single words related to the theme, no spaces or hyphens
- Return only the JSON, no other text"""

        return system_prompt, user_prompt

    def get_stats(self) -> Dict:
        """Get usage statistics."""
        return self.stats.copy()
