"""Completion providers for STAR report generation.

A provider turns a prompt into raw model text in a single request/response
exchange.  Two backends are available (selected via the LLM_BACKEND env var):
  - "sdk": the anthropic Python SDK.  Used by default when an API key is
           configured.
  - "cli": shells out to the Claude CLI binary and reads its JSON envelope.

Provider failures are raised as ProviderError.  When the provider explicitly
reports that the requested model cannot be served, ProviderUnavailableError
is raised instead so the caller can substitute a backup model.  A response
that arrives but is malformed is returned as text, never raised.
"""
import logging
import subprocess
import time

import anthropic
from json_repair import loads as repair_loads

from config import (
    CLAUDE_BIN, CLAUDE_COMMON_FLAGS, LLM_BACKEND,
    GENERATION_MAX_TOKENS, GENERATION_TEMPERATURE, GENERATION_TIMEOUT,
    get_api_key,
)
from core.errors import ProviderError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class CompletionProvider:
    """Contract for completion backends.

    ``params`` is passed through uninterpreted apart from the keys a backend
    understands (temperature, max_tokens, timeout).
    """

    name = "base"

    def complete(self, prompt: str, model: str, params: dict = None) -> str:
        raise NotImplementedError


# ---- Claude SDK -------------------------------------------------------------

def _error_type(exc):
    """Return the provider's error type string from an API error body, if any."""
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return error.get("type")
    return None


class AnthropicProvider(CompletionProvider):
    """Call Claude via the Anthropic Python SDK."""

    name = "sdk"

    def __init__(self, api_key=None, client=None):
        self._api_key = api_key
        self._client = client

    @property
    def client(self):
        # Created on first use so a missing key fails the request, not app startup
        if self._client is None:
            self._client = anthropic.Anthropic(api_key=self._api_key or get_api_key() or None)
        return self._client

    def complete(self, prompt, model, params=None):
        params = params or {}
        start = time.time()
        try:
            response = self.client.messages.create(
                model=model,
                max_tokens=params.get("max_tokens", GENERATION_MAX_TOKENS),
                temperature=params.get("temperature", GENERATION_TEMPERATURE),
                messages=[{"role": "user", "content": prompt}],
                timeout=params.get("timeout", GENERATION_TIMEOUT),
            )
        except anthropic.NotFoundError as e:
            raise ProviderUnavailableError(f"Model {model} is not available: {e}")
        except anthropic.APITimeoutError:
            raise ProviderError(f"Anthropic request timed out (model={model})", kind="timeout")
        except anthropic.APIStatusError as e:
            if _error_type(e) == "not_found_error":
                raise ProviderUnavailableError(f"Model {model} is not available: {e}")
            raise ProviderError(f"Anthropic API error: {e}", kind=_error_type(e) or "api_error")
        except anthropic.APIError as e:
            raise ProviderError(f"Anthropic API error: {e}", kind="api_error")
        except anthropic.AnthropicError as e:
            # e.g. no API key configured
            raise ProviderError(f"Anthropic client error: {e}", kind="client_error")

        elapsed_ms = int((time.time() - start) * 1000)
        text = "\n".join(
            block.text for block in response.content if block.type == "text"
        )
        logger.debug("Completion from %s in %dms (%d chars)", model, elapsed_ms, len(text))
        return text


# ---- Claude CLI --------------------------------------------------------------

class ClaudeCliProvider(CompletionProvider):
    """Run the prompt through the Claude CLI binary."""

    name = "cli"

    def __init__(self, binary=CLAUDE_BIN):
        self.binary = binary

    def complete(self, prompt, model, params=None):
        params = params or {}
        timeout = params.get("timeout", GENERATION_TIMEOUT)
        cmd = [
            self.binary, "-p", prompt,
            *CLAUDE_COMMON_FLAGS,
            "--model", model,
            "--no-session-persistence",
        ]

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except FileNotFoundError:
            raise ProviderError(
                "Claude CLI not found. Install it or set ANTHROPIC_API_KEY to use SDK mode.",
                kind="cli_missing",
            )
        except subprocess.TimeoutExpired:
            raise ProviderError(f"Claude CLI timed out after {timeout}s", kind="timeout")

        if result.returncode != 0:
            stderr = result.stderr.strip()[:500] if result.stderr else "unknown error"
            raise ProviderError(f"Claude CLI failed (exit {result.returncode}): {stderr}",
                                kind="cli_failed")

        envelope = repair_loads(result.stdout)
        if not isinstance(envelope, dict):
            return result.stdout
        if envelope.get("is_error"):
            raise ProviderError(f"Claude error: {str(envelope.get('result', 'unknown'))[:300]}",
                                kind="cli_error")
        return envelope.get("result") or ""


_PROVIDERS = {
    "sdk": AnthropicProvider,
    "cli": ClaudeCliProvider,
}


def get_provider(backend=None):
    """Return a provider for *backend* ("sdk" or "cli").

    With no explicit backend, LLM_BACKEND is used; when that is unset the SDK
    is chosen if an API key is configured, otherwise the CLI.
    """
    backend = (backend or LLM_BACKEND or ("sdk" if get_api_key() else "cli")).lower()
    if backend not in _PROVIDERS:
        raise ValueError(f"Unknown LLM backend: {backend}")
    return _PROVIDERS[backend]()
