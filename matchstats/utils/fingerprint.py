"""
Deterministic match fingerprints.

Both players who import the same physical match hold mirrored records: the
same date, event and round, with hero fields swapped. The fingerprint sorts the
heroes so either side hashes to the same 16-hex-digit value, which is used as
the key of shared per-match threads.
"""

import struct
from typing import Mapping, Tuple, Union

from matchstats.constants import FingerprintConstants
from matchstats.data_models.match import MatchRecord

MASK_32 = 0xFFFFFFFF


def _utf16_code_units(text: str) -> Tuple[int, ...]:
    data = text.encode('utf-16-le')
    return struct.unpack(f'<{len(data) // 2}H', data)


def _normalize_hero(hero: str) -> str:
    return (hero or FingerprintConstants.UNKNOWN_HERO).lower().strip()


def _parse_event_and_round(notes: str) -> Tuple[str, str]:
    """Split "EventName | Round N" into its lower-cased parts."""
    parts = [part.strip().lower() for part in (notes or '').split(FingerprintConstants.SEPARATOR)]
    event_name = parts[0] if parts else ''
    round_name = parts[1] if len(parts) > 1 else ''
    return event_name, round_name


def _match_fields(match: Union[MatchRecord, Mapping]) -> Tuple[str, str, str, str]:
    if isinstance(match, MatchRecord):
        return match.date, match.hero_played, match.opponent_hero, match.notes
    return (
        match.get('date', ''),
        match.get('heroPlayed', ''),
        match.get('opponentHero', ''),
        match.get('notes', ''),
    )


def compute_match_fingerprint(match: Union[MatchRecord, Mapping]) -> str:
    """
    Compute the fingerprint of a match, identical for both participants.

    Args:
        match: MatchRecord or a stored camelCase match document

    Returns:
        16 lower-case hex characters
    """
    date, hero_played, opponent_hero, notes = _match_fields(match)
    sep = FingerprintConstants.SEPARATOR

    # Compare by UTF-16 code units so ordering matches fingerprints already stored
    heroes = sep.join(sorted(
        [_normalize_hero(hero_played), _normalize_hero(opponent_hero)],
        key=_utf16_code_units
    ))
    event_name, round_name = _parse_event_and_round(notes)

    raw = sep.join([FingerprintConstants.VERSION, date or '', heroes, event_name, round_name])

    a = FingerprintConstants.FNV_SEED
    b = FingerprintConstants.MURMUR_SEED
    for code in _utf16_code_units(raw):
        a = ((a ^ code) * FingerprintConstants.FNV_PRIME) & MASK_32
        b = ((b ^ code) * FingerprintConstants.MURMUR_PRIME) & MASK_32

    return f'{a:08x}{b:08x}'
