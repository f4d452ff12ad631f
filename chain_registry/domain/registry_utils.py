import re
from typing import Literal, Optional, Any, Tuple

PATHS_DIR = "_IBC"

MatchType = Literal["Exact", "CaseInsensitive", "StartsWith", "Substring", "Wildcard"]


def pair_key(chain_a: str, chain_b: str) -> Tuple[str, str]:
    """
    Key for the unordered pair {chain_a, chain_b}.

    Both orientations of a pair map to the same tuple.
    """
    return (chain_a, chain_b) if chain_a <= chain_b else (chain_b, chain_a)


def path_name(chain_a: str, chain_b: str) -> str:
    """Registry file stem for a path; chain names are ordered alphabetically."""
    first, second = pair_key(chain_a, chain_b)
    return f"{first}-{second}"


def path_file(chain_a: str, chain_b: str) -> str:
    """Relative location of a path document inside the registry root."""
    return f"{PATHS_DIR}/{path_name(chain_a, chain_b)}.json"


def strip_nulls(value: Any) -> Any:
    """
    Recursively remove keys with value None from dictionaries.

    Lists are preserved, but their elements are also cleaned.
    """
    if isinstance(value, dict):
        return {k: strip_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [strip_nulls(v) for v in value]
    return value


def match_text(value: str, keyword: str, match_type: Optional[MatchType] = None) -> bool:
    """
    Match a chain name against a keyword; the default is Substring.
    """
    match = match_type or "Substring"

    # Exact is case-sensitive like chain names; everything else is not.
    if match == "Exact":
        return value == keyword
    if match == "CaseInsensitive":
        return value.lower() == keyword.lower()
    if match == "StartsWith":
        return value.lower().startswith(keyword.lower())
    if match == "Substring":
        return keyword.lower() in value.lower()
    if match == "Wildcard":
        # Only * and ? are supported
        pattern = "^" + re.escape(keyword).replace(r"\*", ".*").replace(r"\?", ".") + "$"
        return re.search(pattern, value, flags=re.IGNORECASE) is not None
    raise ValueError(f"Unknown match type: {match_type!r}")
