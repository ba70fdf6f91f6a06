"""
Unit tests for substance resolution tiers: exact id, detection name, generic term, unknown.
Run from repo root: python -m pytest backend/tests/test_substance_resolver.py -v
"""
import pytest


def _shipped_resolver():
    from core.config import get_catalog_path
    from core.resolution.substance_resolver import SubstanceResolver
    if not get_catalog_path().exists():
        pytest.skip("substances.json not found")
    return SubstanceResolver()


def _record(sid, detection_names, severity=50):
    from core.catalog.substance_schema import SubstanceRecord
    return SubstanceRecord(id=sid, name=sid.title(), severity_score=severity, detection_names=detection_names)


def test_resolve_exact_id():
    from core.resolution.substance_resolver import MatchTier
    resolver = _shipped_resolver()
    rec, tier = resolver.resolve_with_tier("e102")
    assert rec.id == "e102"
    assert tier == MatchTier.EXACT
    assert resolver.resolve("E621").id == "e621"


def test_exact_id_beats_earlier_detection_name():
    """A token equal to an id resolves to that id even if an earlier record's detection name matches."""
    from core.catalog.substance_catalog import SubstanceCatalog
    from core.resolution.substance_resolver import MatchTier, SubstanceResolver
    catalog = SubstanceCatalog.from_records([
        _record("seasoning", ["salt"]),
        _record("salt", ["sea salt"]),
    ])
    rec, tier = SubstanceResolver(catalog).resolve_with_tier("salt")
    assert rec.id == "salt"
    assert tier == MatchTier.EXACT


def test_resolve_detection_name_both_directions():
    """Token containing a detection name, or contained in one, both match."""
    from core.resolution.substance_resolver import MatchTier
    resolver = _shipped_resolver()
    rec, tier = resolver.resolve_with_tier("tartrazine (colour)")
    assert rec.id == "e102"
    assert tier == MatchTier.DETECTION_NAME
    assert resolver.resolve("fd&c red 40").id == "e129"
    assert resolver.resolve("hydrogenated").id == "trans_fats"


def test_detection_name_tie_break_is_catalog_order():
    """'sodium' is inside 'monosodium glutamate'; e621 is declared before salt so it wins."""
    resolver = _shipped_resolver()
    assert resolver.resolve("sodium").id == "e621"


def test_first_record_in_catalog_order_wins():
    from core.catalog.substance_catalog import SubstanceCatalog
    from core.resolution.substance_resolver import SubstanceResolver
    catalog = SubstanceCatalog.from_records([
        _record("first", ["red dye"]),
        _record("second", ["red"]),
    ])
    assert SubstanceResolver(catalog).resolve("red").id == "first"


def test_resolve_generic_term_returns_mapped_sequence():
    """Category phrases resolve to every mapped record, in mapped order."""
    from core.resolution.substance_resolver import MatchTier
    resolver = _shipped_resolver()
    result, tier = resolver.resolve_with_tier("artificial sweeteners")
    assert tier == MatchTier.GENERIC
    assert isinstance(result, list)
    assert [r.id for r in result] == ["e951", "e954"]
    colours = resolver.resolve("permitted synthetic food colours")
    assert [r.id for r in colours] == ["e102", "e110", "e129", "e122"]


def test_generic_term_missing_id_uses_placeholder():
    from core.catalog.substance_catalog import SubstanceCatalog
    from core.resolution.substance_resolver import SubstanceResolver
    catalog = SubstanceCatalog.from_records(
        [_record("e951", ["aspartame"], severity=88)],
        generic_terms={"sweeteners blend": ["e951", "e999"]},
    )
    result = SubstanceResolver(catalog).resolve("natural sweeteners blend")
    assert [r.id for r in result] == ["e951", "unknown"]
    assert result[1].name == "natural sweeteners blend"
    assert result[1].severity_score == 50


def test_resolve_unknown_fallback():
    from core.resolution.substance_resolver import MatchTier
    resolver = _shipped_resolver()
    rec, tier = resolver.resolve_with_tier("water")
    assert tier == MatchTier.UNKNOWN
    assert rec.id == "unknown"
    assert rec.name == "water"
    assert rec.severity_score == 50
    assert set(rec.regulatory_status.values()) == {"Unknown"}


def test_resolve_all_flattens():
    resolver = _shipped_resolver()
    assert [r.id for r in resolver.resolve_all("artificial sweeteners")] == ["e951", "e954"]
    assert [r.id for r in resolver.resolve_all("sugar")] == ["sugar"]


def test_empty_catalog_resolves_everything_unknown():
    from core.catalog.substance_catalog import SubstanceCatalog
    from core.resolution.substance_resolver import SubstanceResolver
    resolver = SubstanceResolver(SubstanceCatalog.from_records([]))
    assert resolver.resolve("sugar").id == "unknown"
    assert resolver.resolve("").id == "unknown"
