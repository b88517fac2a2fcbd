"""
Application-level AI status aggregation.

An application has one ``ai_verification_status`` and one
``ai_verification_result`` while each of its documents carries its own.
The policy deciding how document outcomes combine is chosen by the
AI_STATUS_AGGREGATION setting:

  - all_documents: verified only when every document is verified; the
    stored result is the union of every document's checks and issues
  - latest_document: the most recently processed document decides
"""

from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from app.core.config import settings
from app.core.errors import ValidationError

PENDING = "pending"
VERIFIED = "verified"
FLAGGED = "flagged"

ResultMap = Dict[str, Any]


def all_documents(statuses: Sequence[str]) -> str:
    """Logical AND over every document's AI status."""
    if not statuses:
        return PENDING
    return VERIFIED if all(status == VERIFIED for status in statuses) else FLAGGED


def latest_document(statuses: Sequence[str]) -> str:
    """Last write wins. ``statuses`` are in processing order."""
    if not statuses:
        return PENDING
    return statuses[-1]


def merge_all_results(results: Sequence[Optional[ResultMap]]) -> Optional[ResultMap]:
    """
    Union of per-document verdicts.

    A field checked by several documents is verified only if every one of
    them verified it. Issues keep their first-seen order without repeats.
    """
    results = [r for r in results if r is not None]
    if not results:
        return None

    verified: Dict[str, bool] = {}
    issues: List[str] = []
    for result in results:
        for field, ok in (result.get("verified") or {}).items():
            verified[field] = verified.get(field, True) and bool(ok)
        for issue in result.get("issues") or []:
            if issue not in issues:
                issues.append(issue)

    return {
        "verified": verified,
        "issues": issues,
        "isValid": all(r.get("isValid", True) for r in results),
    }


def latest_result(results: Sequence[Optional[ResultMap]]) -> Optional[ResultMap]:
    results = [r for r in results if r is not None]
    return results[-1] if results else None


class Policy(NamedTuple):
    status: Callable[[Sequence[str]], str]
    result: Callable[[Sequence[Optional[ResultMap]]], Optional[ResultMap]]


AGGREGATION_POLICIES: Dict[str, Policy] = {
    "all_documents": Policy(all_documents, merge_all_results),
    "latest_document": Policy(latest_document, latest_result),
}


def get_policy(name: str = None) -> Policy:
    name = name or settings.AI_STATUS_AGGREGATION
    try:
        return AGGREGATION_POLICIES[name]
    except KeyError:
        raise ValidationError(f"Unknown AI status aggregation policy '{name}'")


def aggregate_ai_status(statuses: Sequence[str], policy: str = None) -> str:
    return get_policy(policy).status(statuses)


def aggregate_ai_result(results: Sequence[Optional[ResultMap]], policy: str = None) -> Optional[ResultMap]:
    return get_policy(policy).result(results)
