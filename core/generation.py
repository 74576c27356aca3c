"""Generate STAR reports: prompt -> completion provider -> parser.

The only retry in the pipeline is model substitution: when the provider
reports the primary model as unavailable, the request is sent once more to
the configured backup model.  Every other provider failure surfaces as a
GenerationError.  Parsing never fails; a degraded parse still yields a
complete GenerationResult.
"""
import logging

from config import get_model_config
from core.errors import GenerationError, ProviderError, ProviderUnavailableError, ValidationError
from core.llm import get_provider
from core.models import GenerationResult
from core.parser import parse_star_response
from core.prompts import build_star_prompt

logger = logging.getLogger(__name__)


class GenerationService:
    """Turn a story into a GenerationResult.

    Args:
        provider: CompletionProvider used for every call.
        primary_model: Model tried first.
        backup_model: Substitute used once if the primary is unavailable.
            None disables substitution.
        params: Provider params (temperature, max_tokens, timeout).
    """

    def __init__(self, provider, primary_model, backup_model=None, params=None):
        self.provider = provider
        self.primary_model = primary_model
        self.backup_model = backup_model
        self.params = dict(params or {})

    @classmethod
    def from_config(cls, provider=None):
        """Build a service from config.get_model_config() and the default provider."""
        model_config = get_model_config()
        return cls(
            provider=provider or get_provider(),
            primary_model=model_config["primary_model"],
            backup_model=model_config["backup_model"],
            params=model_config["params"],
        )

    def _complete(self, prompt):
        """Return (raw_text, model_used), substituting the backup model once."""
        try:
            return self.provider.complete(prompt, self.primary_model, self.params), self.primary_model
        except ProviderUnavailableError as e:
            if not self.backup_model or self.backup_model == self.primary_model:
                raise GenerationError(
                    f"Error generating STAR report: {e.message}", model=self.primary_model
                )
            logger.warning("Model %s unavailable (%s); retrying with %s",
                           self.primary_model, e.message, self.backup_model)
        except ProviderError as e:
            raise GenerationError(
                f"Error generating STAR report: {e.message}", model=self.primary_model
            )

        try:
            return self.provider.complete(prompt, self.backup_model, self.params), self.backup_model
        except ProviderError as e:
            raise GenerationError(
                f"Error generating STAR report: {e.message}", model=self.backup_model
            )

    def generate(self, story, competency, store_category):
        """Generate a STAR report for *story*.

        Raises:
            ValidationError: story, competency or store_category is missing.
            GenerationError: the provider failed and no substitution succeeded.
        """
        missing = [
            name for name, value in (
                ("story", story), ("competency", competency), ("storeCategory", store_category),
            )
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise ValidationError(
                f"Missing required parameters: {', '.join(missing)}", fields=missing
            )

        prompt = build_star_prompt(story, competency, store_category)
        raw, model = self._complete(prompt)

        parsed = parse_star_response(raw)

        return GenerationResult(
            **parsed.fields,
            competency=competency,
            store_category=store_category,
            original_story=story,
            parse_strategy=parsed.strategy,
            model=model,
            raw_response=parsed.raw_response,
        )
