"""
Deterministic scoring for job and matrimonial recommendations.

Each score is a weighted sum of per-factor fractions in [0, 1]:
- Job match: location, salary range overlap, experience band, profession
- Matrimonial compatibility: mutual age fit, religion, location, occupation

Scores are rounded half-up and clamped to [0, 100]. The reason string names
the two largest matching contributions. Every function here is pure.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from lifematch.core.config import settings
from lifematch.schemas.job import JobListing
from lifematch.schemas.profile import JobProfile, MatrimonialProfile

STOP_WORDS = frozenset({"and", "of", "the", "a", "an", "in", "for", "to", "at", "with"})

_TOKEN_RE = re.compile(r"[a-z0-9]+")
_LEVEL_KEY_RE = re.compile(r"[^a-z0-9]")

# Years of experience expected at each seniority level, inclusive
EXPERIENCE_BANDS: Dict[str, Tuple[int, int]] = {
    "entry": (0, 2),
    "junior": (1, 3),
    "mid": (3, 6),
    "senior": (5, 10),
    "lead": (8, 15),
    "principal": (10, 40),
    "director": (10, 40),
    "executive": (10, 40),
}

JOB_FACTOR_LABELS = {
    "location": "location",
    "salary": "salary range",
    "experience": "experience level",
    "profession": "profession",
}

MATRIMONIAL_FACTOR_LABELS = {
    "age": "age preferences",
    "religion": "religion",
    "location": "location",
    "occupation": "occupation",
}

NO_MATCH_REASON = "no strong matching attributes"


@dataclass(frozen=True)
class ScoreBreakdown:
    """Final score, its reason and the per-factor details."""

    score: int
    reason: str
    factors: List[Dict[str, Any]] = field(default_factory=list)


def normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def tokenize(value: Optional[str]) -> FrozenSet[str]:
    """Lowercase alphanumeric runs without stop words."""
    return frozenset(t for t in _TOKEN_RE.findall(normalize(value)) if t not in STOP_WORDS)


def token_overlap(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    """Overlap coefficient of two token sets; 0 when either is empty."""
    if not a or not b:
        return 0.0
    return len(a & b) / min(len(a), len(b))


def location_fraction(a: Optional[str], b: Optional[str], mismatch_credit: float) -> float:
    """Full credit for equal locations, partial credit for two known but different ones."""
    left, right = normalize(a), normalize(b)
    if not left or not right:
        return 0.0
    if left == right:
        return 1.0
    return mismatch_credit


def salary_fraction(p_min: int, p_max: int, l_min: int, l_max: int) -> float:
    """Inclusive overlap length over inclusive union length of two ranges."""
    overlap = min(p_max, l_max) - max(p_min, l_min) + 1
    if overlap <= 0:
        return 0.0
    union = max(p_max, l_max) - min(p_min, l_min) + 1
    return overlap / union


def experience_band(level: Optional[str]) -> Optional[Tuple[int, int]]:
    """Look up the band for a level such as ``"Mid-Level"`` or ``"senior level"``."""
    key = _LEVEL_KEY_RE.sub("", normalize(level))
    if key.endswith("level") and key != "level":
        key = key[: -len("level")]
    return EXPERIENCE_BANDS.get(key)


def experience_fraction(years: int, level: Optional[str], decay_years: float) -> float:
    """1.0 inside the band, decaying linearly with the distance outside it."""
    band = experience_band(level)
    if band is None:
        return 0.0
    low, high = band
    if low <= years <= high:
        return 1.0
    distance = low - years if years < low else years - high
    return max(0.0, 1.0 - distance / decay_years)


def age_fraction(a: MatrimonialProfile, b: MatrimonialProfile) -> float:
    """1.0 when each age suits the other's range, 0.5 when only one does."""
    fits = int(a.min_age <= b.age <= a.max_age) + int(b.min_age <= a.age <= b.max_age)
    return fits / 2


def religion_fraction(a: Optional[str], b: Optional[str]) -> float:
    left, right = normalize(a), normalize(b)
    return 1.0 if left and left == right else 0.0


def round_score(value: float) -> int:
    """Round half-up and clamp to [0, 100]."""
    return max(0, min(100, int(value + 0.5)))


def _combine(
    fractions: Mapping[str, float],
    weights: Mapping[str, int],
    labels: Mapping[str, str],
    matched: Mapping[str, bool],
) -> ScoreBreakdown:
    factors = []
    for name, label in labels.items():
        fraction = fractions[name]
        factors.append({
            "factor": name,
            "label": label,
            "fraction": fraction,
            "weight": weights[name],
            "contribution": weights[name] * fraction,
            "matched": matched[name],
        })

    total = sum(f["contribution"] for f in factors)

    # sorted() is stable, so equal contributions keep the declared factor order
    top = [
        f["label"]
        for f in sorted(factors, key=lambda f: -f["contribution"])
        if f["matched"] and f["contribution"] > 0
    ][:2]
    if len(top) == 2:
        reason = f"{top[0]} and {top[1]} match"
    elif top:
        reason = f"{top[0]} match"
    else:
        reason = NO_MATCH_REASON

    return ScoreBreakdown(score=round_score(total), reason=reason, factors=factors)


def score_job(
    profile: JobProfile,
    listing: JobListing,
    weights: Optional[Mapping[str, int]] = None,
    mismatch_credit: Optional[float] = None,
    decay_years: Optional[float] = None,
) -> ScoreBreakdown:
    """Score a listing against a job profile.

    Args:
        profile: Caller's job profile
        listing: Listing being scored
        weights: Factor weights summing to 100; defaults to settings
        mismatch_credit: Credit for two known, different locations
        decay_years: Years outside the band at which experience credit reaches 0

    Returns:
        ScoreBreakdown with the 0-100 score and its reason
    """
    weights = weights or settings.job_weights
    credit = settings.LOCATION_MISMATCH_CREDIT if mismatch_credit is None else mismatch_credit
    decay = decay_years or settings.EXPERIENCE_DECAY_YEARS

    fractions = {
        "location": location_fraction(profile.location, listing.location, credit),
        "salary": salary_fraction(
            profile.min_salary, profile.max_salary, listing.min_salary, listing.max_salary
        ),
        "experience": experience_fraction(profile.experience, listing.experience_level, decay),
        "profession": token_overlap(
            tokenize(profile.profession),
            tokenize(listing.category) | tokenize(listing.title),
        ),
    }
    matched = {
        "location": fractions["location"] == 1.0,
        "salary": fractions["salary"] > 0,
        "experience": fractions["experience"] > 0,
        "profession": fractions["profession"] > 0,
    }
    return _combine(fractions, weights, JOB_FACTOR_LABELS, matched)


def score_compatibility(
    a: MatrimonialProfile,
    b: MatrimonialProfile,
    weights: Optional[Mapping[str, int]] = None,
    mismatch_credit: Optional[float] = None,
) -> ScoreBreakdown:
    """Score two matrimonial profiles; the result does not depend on argument order.

    Args:
        a: First profile
        b: Second profile
        weights: Factor weights summing to 100; defaults to settings
        mismatch_credit: Credit for two known, different preferred locations

    Returns:
        ScoreBreakdown with the 0-100 score and its reason
    """
    weights = weights or settings.matrimonial_weights
    credit = settings.LOCATION_MISMATCH_CREDIT if mismatch_credit is None else mismatch_credit

    fractions = {
        "age": age_fraction(a, b),
        "religion": religion_fraction(a.religion, b.religion),
        "location": location_fraction(a.preferred_location, b.preferred_location, credit),
        "occupation": token_overlap(tokenize(a.occupation), tokenize(b.occupation)),
    }
    matched = {
        "age": fractions["age"] > 0,
        "religion": fractions["religion"] > 0,
        "location": fractions["location"] == 1.0,
        "occupation": fractions["occupation"] > 0,
    }
    return _combine(fractions, weights, MATRIMONIAL_FACTOR_LABELS, matched)


def compatibility_score(a: Optional[MatrimonialProfile], b: Optional[MatrimonialProfile]) -> int:
    """Compatibility of two profiles, 0 when either is missing."""
    if a is None or b is None:
        return 0
    return score_compatibility(a, b).score
