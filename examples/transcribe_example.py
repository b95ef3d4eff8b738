"""Example: Transcribe an audio file using the Gemini gateway library."""

import asyncio
import mimetypes
import os
import sys

from gemini_gateway import GatewayConfig, ModelGateway, ProviderError, UploadedAudio


async def main(audio_path: str):
    """Transcribe an audio file."""
    config = GatewayConfig(api_key=os.environ["GEMINI_API_KEY"])
    gateway = ModelGateway.from_config(config)

    mime_type = mimetypes.guess_type(audio_path)[0] or "audio/mpeg"
    with open(audio_path, "rb") as f:
        audio = UploadedAudio(mime_type=mime_type, data=f.read())

    print(f"Transcribing {audio.size_bytes} bytes of {mime_type} with {config.model}...")
    try:
        transcript = await gateway.transcribe(audio)
    except ProviderError as e:
        print(f"Gemini refused the request ({e.kind.value}): {e.message}")
        return

    print(f"\nTranscript:\n{transcript}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "path/to/your/audio.mp3"))
