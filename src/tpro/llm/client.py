"""Unified async LLM client via LiteLLM."""

from __future__ import annotations

from tpro.core.config import LLMConfig


async def acomplete(
    messages: list[dict[str, str]],
    config: LLMConfig,
    **kwargs: object,
) -> str:
    """Send a chat completion request via LiteLLM.

    Args:
        messages: Chat messages in OpenAI format.
        config: LLM configuration.
        **kwargs: Additional kwargs passed to litellm.acompletion.

    Returns:
        The assistant's response text (empty string if the model sent none).
    """
    try:
        from litellm import acompletion
    except ImportError:
        raise ImportError(
            "LiteLLM is not installed. Install with: pip install 'transcript-pro[llm]'"
        )

    response = await acompletion(
        model=config.model,
        messages=messages,
        api_base=config.api_base,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        **kwargs,
    )
    return response.choices[0].message.content or ""
