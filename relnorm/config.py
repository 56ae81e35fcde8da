"""
Настройки нормализации по умолчанию и их чтение из окружения
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from relnorm.models import NormalForm

DEFAULT_RELATION_NAME = "R"
DEFAULT_TARGET_FORM = NormalForm.BCNF

ENV_RELATION_NAME = "RELNORM_RELATION_NAME"
ENV_TARGET_FORM = "RELNORM_TARGET_FORM"
ENV_REQUIRE_LEGAL = "RELNORM_REQUIRE_LEGAL"
ENV_REQUIRE_LOSSLESS = "RELNORM_REQUIRE_LOSSLESS"


def _truthy(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class NormalizationSettings:
    """
    Параметры рекурсивной декомпозиции

    Легальность и отсутствие потерь по умолчанию требуются; сам
    RecursiveDecomposition без настроек их не требует.
    """
    relation_name: str = DEFAULT_RELATION_NAME
    target_form: NormalForm = DEFAULT_TARGET_FORM
    require_legal: bool = True
    require_lossless: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NormalizationSettings":
        """
        Прочитать настройки из переменных окружения

        Args:
            environ: Источник переменных (по умолчанию os.environ)

        Returns:
            Настройки; отсутствующие переменные заменяются значениями по умолчанию
        """
        env = os.environ if environ is None else environ
        target = env.get(ENV_TARGET_FORM)
        return cls(
            relation_name=env.get(ENV_RELATION_NAME) or DEFAULT_RELATION_NAME,
            target_form=NormalForm.from_name(target) if target else DEFAULT_TARGET_FORM,
            require_legal=_truthy(env.get(ENV_REQUIRE_LEGAL), True),
            require_lossless=_truthy(env.get(ENV_REQUIRE_LOSSLESS), True),
        )
