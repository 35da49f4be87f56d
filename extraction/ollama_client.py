"""
Client for a local Ollama server
"""
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from config import Config

logger = logging.getLogger(__name__)


class OllamaError(Exception):
    """The Ollama server could not produce a usable response"""


def parse_json_response(response_text: str) -> Dict[str, Any]:
    """Parse a JSON object out of model output, tolerating code fences and chatter"""
    response_text = response_text.strip()

    if response_text.startswith('```json'):
        response_text = response_text[7:]
        if response_text.endswith('```'):
            response_text = response_text[:-3]
    elif response_text.startswith('```'):
        response_text = response_text[3:]
        if response_text.endswith('```'):
            response_text = response_text[:-3]

    json_start = response_text.find('{')
    json_end = response_text.rfind('}')
    if json_start != -1 and json_end != -1 and json_end > json_start:
        response_text = response_text[json_start:json_end+1]

    try:
        result = json.loads(response_text)
    except json.JSONDecodeError as e:
        logger.error(f"Response text: {response_text[:200]}...")
        raise OllamaError(f"Model did not return valid JSON: {e}")

    if not isinstance(result, dict):
        raise OllamaError("Model returned JSON that is not an object")
    return result


class OllamaClient:
    """Thin async wrapper over the Ollama REST API"""

    def __init__(self, base_url: str = Config.OLLAMA_BASE_URL, timeout: float = Config.OLLAMA_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    async def is_running(self) -> bool:
        try:
            async with self.session.get(self.base_url, timeout=aiohttp.ClientTimeout(total=5)) as response:
                return response.status == 200
        except (aiohttp.ClientError, asyncio.TimeoutError):
            return False

    async def list_models(self) -> List[Dict[str, Any]]:
        try:
            async with self.session.get(f"{self.base_url}/api/tags", timeout=self.timeout) as response:
                if response.status != 200:
                    logger.error(f"Failed to list models: HTTP {response.status}")
                    return []
                data = await response.json(content_type=None)
                return data.get('models', []) if isinstance(data, dict) else []
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Error listing Ollama models: {e}")
            return []

    async def has_model(self, model_name: str) -> bool:
        models = await self.list_models()
        return any(m.get('name') == model_name or m.get('name', '').startswith(f"{model_name}:")
                   for m in models)

    async def generate(self, model: str, prompt: str, system: Optional[str] = None,
                       json_format: bool = False, options: Optional[Dict[str, Any]] = None) -> str:
        """Run a non-streaming generation and return the response text"""
        payload = {
            'model': model,
            'prompt': prompt,
            'stream': False,
        }
        if system:
            payload['system'] = system
        if json_format:
            payload['format'] = 'json'
        if options:
            payload['options'] = options

        try:
            async with self.session.post(f"{self.base_url}/api/generate", json=payload,
                                         timeout=self.timeout) as response:
                if response.status != 200:
                    body = await response.text()
                    raise OllamaError(f"Ollama API error: HTTP {response.status} {body[:200]}")
                data = await response.json(content_type=None)
        except asyncio.TimeoutError:
            raise OllamaError(f"Ollama request timed out after {self.timeout.total}s")
        except aiohttp.ClientError as e:
            raise OllamaError(f"Ollama request failed: {e}")
        except ValueError as e:
            raise OllamaError(f"Malformed Ollama response: {e}")

        if not isinstance(data, dict) or 'response' not in data:
            raise OllamaError("Ollama response has no 'response' field")
        return data['response']

    async def generate_json(self, model: str, prompt: str, system: Optional[str] = None) -> Dict[str, Any]:
        """Generate structured JSON output"""
        response_text = await self.generate(
            model,
            prompt,
            system=system or "You are a helpful assistant that always responds with valid JSON.",
            json_format=True,
            options={'temperature': 0.1, 'num_predict': 4096},
        )
        return parse_json_response(response_text)

