import logging
import openai
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from jiazheng_assistant.core.config import settings
from jiazheng_assistant.core.exceptions import LLMServiceError

logger = logging.getLogger(__name__)

# Worth another attempt; auth and bad-request errors are not
TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.APITimeoutError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class LLMService:
    def __init__(self, api_key: str = None, model: str = None):
        # LOAD OPENROUTER CONFIG
        self.api_key = api_key or settings.OPENROUTER_API_KEY
        self.base_url = settings.LLM_BASE_URL
        self.model = model or settings.LLM_MODEL
        self.client = None

        if self.api_key:
            # Initialize Client with Custom Base URL
            self.client = openai.OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                default_headers={
                    "HTTP-Referer": settings.SITE_URL,
                    "X-Title": settings.APP_TITLE,
                },
            )

    @property
    def is_configured(self) -> bool:
        return settings.LLM_ENABLED and self.client is not None

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        reraise=True,
    )
    def _complete(self, system_prompt: str, user_prompt: str):
        return self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ],
            temperature=settings.LLM_TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
            stream=False
        )

    def generate_reply(self, system_prompt: str, user_prompt: str) -> str:
        """
        Sends one system + user turn and returns the assistant text.
        Raises LLMServiceError on any failure so callers can fall back.
        """
        if not self.is_configured:
            raise LLMServiceError("LLM is disabled or OPENROUTER_API_KEY is not set")

        try:
            response = self._complete(system_prompt, user_prompt)
        except openai.AuthenticationError as e:
            logger.error("🚨 API key rejected, check OPENROUTER_API_KEY (https://openrouter.ai/keys)")
            raise LLMServiceError(f"Authentication failed: {e}", status_code=401) from e
        except openai.APIStatusError as e:
            logger.error(f"LLM call failed [{e.status_code}]: {e}")
            raise LLMServiceError(f"LLM call failed: {e.status_code}", status_code=e.status_code) from e
        except openai.OpenAIError as e:
            logger.error(f"LLM Error: {e}")
            raise LLMServiceError(str(e)) from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise LLMServiceError("LLM returned an empty reply")
        return content.strip()
