"""
Audit trail resolution pass.

resolve_audit_trail is the single entry point: records in, resolved
entries out, in the same order. The lookup maps it builds live only for
the duration of the call.
"""

import logging

from audit.enricher import enrich_record
from audit.extractor import canonicalize, extract_references
from audit.lookups import build_lookup_maps
from core.constants import AuditAction, DefaultLimits

logger = logging.getLogger(__name__)


def is_hidden(record, hidden_actions):
    """System/internal records never shown in the trail"""
    return canonicalize(record).action in hidden_actions


def resolve_audit_trail(records, source, max_workers=DefaultLimits.AUDIT_LOOKUP_WORKERS,
                        hidden_actions=AuditAction.HIDDEN):
    """
    Resolve a batch of ChangeRecordDTOs against a LookupSource.

    Hidden actions are dropped, every referenced id is looked up in one
    batched read per table, and each remaining record is enriched.
    """
    hidden = {action.lower() for action in hidden_actions}
    visible = [record for record in records if not is_hidden(record, hidden)]
    if not visible:
        return []

    refs = extract_references(visible)
    maps = build_lookup_maps(refs, source, max_workers=max_workers)
    entries = [enrich_record(record, maps) for record in visible]

    logger.debug(
        f"Resolved {len(entries)} audit entries "
        f"({len(records) - len(visible)} hidden, {len(maps.users)} users looked up)"
    )
    return entries
