"""Platform triple classification, presets and structured output."""
from platform_triple.targets.triple import (
    ABI,
    OS,
    OS_CANDIDATES,
    Arch,
    BadFormatError,
    Triple,
    TripleError,
    UnknownArchError,
    UnknownOSError,
    Vendor,
    parse_triple,
)
from platform_triple.targets.presets import (
    PRESETS,
    UnsupportedHostError,
    host_triple,
    select_host_preset,
)
from platform_triple.targets.encoding import (
    EncodingError,
    triple_from_dict,
    triple_to_dict,
)

__all__ = [
    "ABI",
    "OS",
    "OS_CANDIDATES",
    "Arch",
    "BadFormatError",
    "EncodingError",
    "PRESETS",
    "Triple",
    "TripleError",
    "UnknownArchError",
    "UnknownOSError",
    "UnsupportedHostError",
    "Vendor",
    "host_triple",
    "parse_triple",
    "select_host_preset",
    "triple_from_dict",
    "triple_to_dict",
]
