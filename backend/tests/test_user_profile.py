"""
Unit tests: UserProfile defaults, merge updates, legacy camelCase keys.
Run from repo root: python -m pytest backend/tests/test_user_profile.py -v
"""
import pytest


def test_user_profile_defaults():
    from core.models.user_profile import UserProfile
    p = UserProfile()
    assert p.age == 30
    assert p.dietary_preferences == []
    assert p.pregnancy_status == "not_pregnant"
    assert not p.is_child
    assert not p.is_pregnant


def test_user_profile_update_merge():
    """update_merge only changes provided fields."""
    from core.models.user_profile import UserProfile
    p = UserProfile(age=40, dietary_preferences=["diabetic"])
    p.update_merge(pregnancy_status="pregnant")
    assert p.age == 40
    assert p.dietary_preferences == ["diabetic"]
    assert p.is_pregnant
    p.update_merge(dietary_preferences="diabetic, low_sodium, ")
    assert p.dietary_preferences == ["diabetic", "low_sodium"]
    p.update_merge(age="12")
    assert p.age == 12
    assert p.is_child


def test_user_profile_rejects_negative_age():
    from core.models.user_profile import UserProfile
    with pytest.raises(ValueError):
        UserProfile(age=-1)
    p = UserProfile()
    with pytest.raises(ValueError):
        p.update_merge(age=-5)
    assert p.age == 30


def test_user_profile_from_dict_camel_case():
    """from_dict accepts the camelCase keys older clients send."""
    from core.models.user_profile import UserProfile
    p = UserProfile.from_dict({
        "age": 10,
        "dietaryPreferences": ["low_sodium"],
        "pregnancyStatus": "not_pregnant",
    })
    assert p.age == 10
    assert p.dietary_preferences == ["low_sodium"]
    assert UserProfile.from_dict(None) == UserProfile()


def test_user_profile_to_dict_round_trip():
    from core.models.user_profile import UserProfile
    p = UserProfile(age=25, dietary_preferences=["diabetic"], pregnancy_status="pregnant")
    assert p.to_dict() == {"age": 25, "dietary_preferences": ["diabetic"], "pregnancy_status": "pregnant"}
    assert UserProfile.from_dict(p.to_dict()) == p
