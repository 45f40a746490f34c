#!/usr/bin/env python3
"""
HTTP translation providers.

Each provider maps one text to one translated text through its public API.
All requests go through a single requests.Session owned by HttpTranslator.

API keys are taken from TranslateOptions.api_key, then from the provider's
environment variable, then from LOCALEKIT_API_KEY.
"""

import os
from typing import TYPE_CHECKING, Any, Callable, Optional

import requests

from ..errors import ProviderError

if TYPE_CHECKING:
    from .translate import TranslateOptions

PROVIDERS = [
    "google",
    "bing",
    "yandex",
    "deepl",
    "libretranslate",
    "openai",
    "claude",
    "gemini",
    "azure-openai",
    "ollama",
]

# Environment variables checked for each provider's API key
API_KEY_ENV = {
    "google": "GOOGLE_API_KEY",
    "bing": "BING_API_KEY",
    "yandex": "YANDEX_API_KEY",
    "deepl": "DEEPL_API_KEY",
    "libretranslate": "LIBRETRANSLATE_API_KEY",
    "openai": "OPENAI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "azure-openai": "AZURE_OPENAI_API_KEY",
}
GENERIC_API_KEY_ENV = "LOCALEKIT_API_KEY"

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "claude": "claude-3-5-sonnet-latest",
    "gemini": "gemini-2.0-flash",
    "azure-openai": "gpt-4",
    "ollama": "llama3.2",
}

MAX_TOKENS = 4096
TEMPERATURE = 0.3


def system_prompt(source: str, target: str) -> str:
    return (
        f"You are a professional translator. Translate the following text from {source} "
        f"to {target}. Only provide the translation, no explanations or additional text."
    )


def resolve_api_key(provider: str, explicit: Optional[str] = None) -> Optional[str]:
    """Return the API key for a provider from the option or the environment."""
    if explicit:
        return explicit
    env_name = API_KEY_ENV.get(provider)
    if env_name and os.getenv(env_name):
        return os.getenv(env_name)
    return os.getenv(GENERIC_API_KEY_ENV)


class HttpTranslator:
    """
    Translator callable backed by the provider HTTP APIs.

    Usage:
        translator = HttpTranslator()
        text = translator("Hello", "en", "tr", options)
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self._providers: dict[str, Callable[..., str]] = {
            "google": self._google,
            "bing": self._bing,
            "yandex": self._yandex,
            "deepl": self._deepl,
            "libretranslate": self._libretranslate,
            "openai": self._openai,
            "claude": self._claude,
            "gemini": self._gemini,
            "azure-openai": self._azure_openai,
            "ollama": self._ollama,
        }

    def __call__(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        provider = options.provider.lower()
        handler = self._providers.get(provider)
        if handler is None:
            raise ProviderError(f"Unknown provider: {options.provider}. Available: {', '.join(PROVIDERS)}")
        return handler(text, source, target, options)

    def close(self) -> None:
        self.session.close()

    def _require_key(self, options: "TranslateOptions", label: str) -> str:
        api_key = resolve_api_key(options.provider.lower(), options.api_key)
        if not api_key:
            raise ProviderError(f"{label} API key is required")
        return api_key

    def _post_json(self, url: str, payload: Any, options: "TranslateOptions", headers: Optional[dict] = None) -> Any:
        response = self.session.post(url, json=payload, headers=headers, timeout=options.timeout)
        response.raise_for_status()
        return response.json()

    def _google(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        # Free web endpoint; returns nested arrays of sentence chunks
        response = self.session.get(
            "https://translate.googleapis.com/translate_a/single",
            params={"client": "gtx", "sl": source, "tl": target, "dt": "t", "q": text},
            timeout=options.timeout,
        )
        response.raise_for_status()
        return self._extract(
            "Google", response.json(), lambda data: "".join(chunk[0] for chunk in data[0] if chunk and chunk[0])
        )

    def _deepl(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        api_key = self._require_key(options, "DeepL")
        response = self.session.post(
            "https://api-free.deepl.com/v2/translate",
            data={
                "auth_key": api_key,
                "text": text,
                "source_lang": source.upper(),
                "target_lang": target.upper(),
            },
            timeout=options.timeout,
        )
        response.raise_for_status()
        return self._extract("DeepL", response.json(), lambda data: data["translations"][0]["text"])

    def _libretranslate(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        endpoint = options.api_endpoint or "https://libretranslate.com"
        data = self._post_json(
            f"{endpoint.rstrip('/')}/translate",
            {
                "q": text,
                "source": source,
                "target": target,
                "api_key": resolve_api_key("libretranslate", options.api_key),
            },
            options,
        )
        return self._extract("LibreTranslate", data, lambda data: data["translatedText"])

    def _yandex(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        api_key = self._require_key(options, "Yandex")
        data = self._post_json(
            "https://translate.api.cloud.yandex.net/translate/v2/translate",
            {"sourceLanguageCode": source, "targetLanguageCode": target, "texts": [text]},
            options,
            headers={"Authorization": f"Api-Key {api_key}"},
        )
        return self._extract("Yandex", data, lambda data: data["translations"][0]["text"])

    def _bing(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        api_key = self._require_key(options, "Microsoft Translator")
        response = self.session.post(
            "https://api.cognitive.microsofttranslator.com/translate",
            params={"api-version": "3.0", "from": source, "to": target},
            json=[{"Text": text}],
            headers={"Ocp-Apim-Subscription-Key": api_key},
            timeout=options.timeout,
        )
        response.raise_for_status()
        return self._extract(
            "Microsoft Translator", response.json(), lambda data: data[0]["translations"][0]["text"]
        )

    def _openai(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        api_key = self._require_key(options, "OpenAI")
        data = self._post_json(
            "https://api.openai.com/v1/chat/completions",
            {
                "model": options.model or DEFAULT_MODELS["openai"],
                "messages": [
                    {"role": "system", "content": system_prompt(source, target)},
                    {"role": "user", "content": text},
                ],
                "temperature": TEMPERATURE,
                "max_tokens": MAX_TOKENS,
            },
            options,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        return self._extract("OpenAI", data, self._chat_content)

    def _claude(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        api_key = self._require_key(options, "Anthropic")
        data = self._post_json(
            "https://api.anthropic.com/v1/messages",
            {
                "model": options.model or DEFAULT_MODELS["claude"],
                "max_tokens": MAX_TOKENS,
                "system": system_prompt(source, target),
                "messages": [{"role": "user", "content": text}],
            },
            options,
            headers={"x-api-key": api_key, "anthropic-version": "2023-06-01"},
        )
        return self._extract("Anthropic", data, lambda data: data["content"][0]["text"].strip())

    def _gemini(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        api_key = self._require_key(options, "Google Gemini")
        model = options.model or DEFAULT_MODELS["gemini"]
        response = self.session.post(
            f"https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
            params={"key": api_key},
            json={
                "contents": [{"parts": [{"text": f"{system_prompt(source, target)}\n\n{text}"}]}],
                "generationConfig": {"temperature": TEMPERATURE, "maxOutputTokens": MAX_TOKENS},
            },
            timeout=options.timeout,
        )
        response.raise_for_status()
        return self._extract(
            "Google Gemini",
            response.json(),
            lambda data: data["candidates"][0]["content"]["parts"][0]["text"].strip(),
        )

    def _azure_openai(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        api_key = self._require_key(options, "Azure OpenAI")
        if not options.api_endpoint:
            raise ProviderError("Azure OpenAI endpoint is required")
        deployment = options.model or DEFAULT_MODELS["azure-openai"]
        response = self.session.post(
            f"{options.api_endpoint.rstrip('/')}/openai/deployments/{deployment}/chat/completions",
            params={"api-version": "2024-02-15-preview"},
            json={
                "messages": [
                    {"role": "system", "content": system_prompt(source, target)},
                    {"role": "user", "content": text},
                ],
                "temperature": TEMPERATURE,
                "max_tokens": MAX_TOKENS,
            },
            headers={"api-key": api_key},
            timeout=options.timeout,
        )
        response.raise_for_status()
        return self._extract("Azure OpenAI", response.json(), self._chat_content)

    def _ollama(self, text: str, source: str, target: str, options: "TranslateOptions") -> str:
        endpoint = options.api_endpoint or "http://localhost:11434"
        data = self._post_json(
            f"{endpoint.rstrip('/')}/api/generate",
            {
                "model": options.model or DEFAULT_MODELS["ollama"],
                "prompt": f"{system_prompt(source, target)}\n\n{text}",
                "stream": False,
                "options": {"temperature": TEMPERATURE},
            },
            options,
        )
        return self._extract("Ollama", data, lambda data: data["response"].strip())

    @staticmethod
    def _chat_content(data: dict) -> str:
        return data["choices"][0]["message"]["content"].strip()

    @staticmethod
    def _extract(label: str, data: Any, getter: Callable[[Any], str]) -> str:
        """Pull the translated text out of a response body or raise ProviderError."""
        try:
            result = getter(data)
        except (IndexError, KeyError, TypeError, AttributeError) as e:
            raise ProviderError(f"Unexpected {label} response: {str(data)[:200]}") from e
        if not isinstance(result, str):
            raise ProviderError(f"Unexpected {label} response: {str(data)[:200]}")
        return result
