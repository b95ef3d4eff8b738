"""Example: Send a text prompt using the Gemini gateway library."""

import asyncio
import os

from gemini_gateway import GatewayConfig, ModelGateway


async def main():
    """Send a simple prompt and print the answer with token usage."""
    config = GatewayConfig(
        api_key=os.environ["GEMINI_API_KEY"],
        model=os.environ.get("GEMINI_MODEL", "gemini-2.5-flash"),
    )
    gateway = ModelGateway.from_config(config)

    print("Sending prompt...")
    result = await gateway.generate_prompt("What is the capital of France?")

    print(f"\nGemini: {result.text}")
    if result.usage:
        print(f"\nTokens used: {result.usage.total_tokens}")


if __name__ == "__main__":
    asyncio.run(main())
