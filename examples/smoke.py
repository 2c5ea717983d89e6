import asyncio

from openai_compat.errors import ConfigurationError
from openai_compat.providers.openai import OpenAIProvider
from openai_compat.types import ChatMessage, CompletionOptions


async def main() -> None:
    # Demonstrate the local configuration check (no request is sent)
    provider = OpenAIProvider(api_key="DUMMY", api_base="")
    try:
        provider.stream_chat([ChatMessage(role="user", content="hi")], CompletionOptions(model="gpt-4"))
    except ConfigurationError as e:
        print("Expected error:", type(e).__name__, e)
    finally:
        await provider.aclose()

    # Against a real server: OPENAI_API_KEY=... OPENAI_API_BASE=... python examples/smoke.py
    async with OpenAIProvider.from_settings() as provider:
        try:
            async for chunk in provider.stream_complete("Say hello.", CompletionOptions(model="gpt-3.5-turbo")):
                print(chunk, end="", flush=True)
            print()
        except Exception as e:
            print("Request failed:", type(e).__name__, e)


if __name__ == "__main__":
    asyncio.run(main())
