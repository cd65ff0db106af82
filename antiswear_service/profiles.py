from __future__ import annotations
import logging
from typing import Callable, Dict, Iterable

from antiswear import Antiswear, AntiswearGroup, Builder, DescriptorError, Mode

logger = logging.getLogger(__name__)


def ru() -> Antiswear:
    return Builder(
        bypasses="ia-я yo-е ё-е 6-б 3-з 0-о c-с p-р /\\-л",
        prefixes_first="у ни а о вы до попере нев невъ за из изъ ис на недо надъ не о об объ от отъ по "
                       "долба долбо под подъ пере пре пред предъ при про раз рас разъ съ со су через черес "
                       "чрез черезъ вз взъ довы без бес долбо",
        prefixes_second="хуе шлюх хуи хуй хую хуя пизд пезд блят бляд сук пидар пидор еб бзд пидр педр хул "
                        "залуп спизд спизж пизж",
        short="бля бл нах манда сучка мозгоеб мозгоебина",
        alphabet="абвгдеёжзийклмнопрстуфхцчшщъыьэюяabcdefghijklmnopqrstuvwxyz ",
        replacements="a-а b-б v-в g-г d-д e-е zh-ж z-з i-и k-к l-л m-м n-н o-о p-п r-р s-с t-т "
                     "u-у f-ф h-х c-ц ch-ч sh-ш yu-ю ya-я",
        exceptions="",
        mode=Mode.STARTSWITH,
    ).build()


def en() -> Antiswear:
    return Builder(
        bypasses="1-i 4-f",
        short="fuck bitch",
        alphabet="abcdefghijklmnopqrstuvwxyz ",
        exceptions="bitchin bitchy",
        mode=Mode.CONTAINS,
    ).build()


PROFILES: Dict[str, Callable[[], Antiswear]] = {
    "en": en,
    "ru": ru,
}


def parse_names(value: str) -> list:
    return [n.strip().lower() for n in (value or "").split(",") if n.strip()]


def build_group(names: Iterable[str]) -> AntiswearGroup:
    """Build a group from profile names, in priority order."""
    names = list(names)
    elems = []
    for name in names:
        try:
            factory = PROFILES[name]
        except KeyError:
            raise DescriptorError(
                f"Unknown profile {name!r}; available: {', '.join(sorted(PROFILES))}"
            ) from None
        elems.append(factory())
    if not elems:
        raise DescriptorError("At least one profile is required")
    logger.info("Antiswear profiles: %s", ", ".join(names))
    return AntiswearGroup(elems=tuple(elems))
