from archcanvas.config import LLM_BASE_URL, LLM_MODEL, LLM_TEMPERATURE
from .chat_completions_client import ChatCompletionsClient


def get_llm_client():
    return ChatCompletionsClient(
        base_url=LLM_BASE_URL,
        model=LLM_MODEL,
        temperature=LLM_TEMPERATURE,
    )
