"""Scoring rules resolution for new tournaments.

Callers may send any subset of the rule fields. Each missing (or null) field
falls back to its default on its own, and values are stored as given: there
is no range or enum checking. ``golden_point`` is coerced to a strict
boolean and the tiebreak fields to strings. Nested objects and arrays are
rejected since no rule column can hold them.
"""
from padel_api.errors import ValidationError
from padel_api.models import ScoringRules

DEFAULT_SCORING_RULES = {
    'best_of_sets': 3,
    'golden_point': False,
    'tiebreak_type': 'long7',
    'tiebreak_final_set': 'allowed',
    'points_win': 2,
    'points_loss': 0,
    'points_walkover': 0,
    'points_retired': 0,
    'sets_diff_weight': 1,
    'games_diff_weight': 1,
}

STRING_RULE_FIELDS = ('tiebreak_type', 'tiebreak_final_set')


def resolve_scoring_rules(raw_rules=None):
    """Return a complete rules mapping built from ``raw_rules`` and the defaults."""
    if not isinstance(raw_rules, dict):
        raw_rules = {}

    resolved = {}
    for field, default in DEFAULT_SCORING_RULES.items():
        value = raw_rules.get(field)
        if isinstance(value, (dict, list)):
            raise ValidationError(f'scoring_rules.{field} must be a single value')
        resolved[field] = default if value is None else value
    resolved['golden_point'] = bool(resolved['golden_point'])
    for field in STRING_RULE_FIELDS:
        resolved[field] = str(resolved[field])
    return resolved


def create_scoring_rules(session, raw_rules=None):
    """Insert a resolved ScoringRules row and return its id.

    The row is flushed, not committed; the caller owns the transaction.
    """
    rules = ScoringRules(**resolve_scoring_rules(raw_rules))
    session.add(rules)
    session.flush()
    return rules.id
