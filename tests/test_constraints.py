from toolinit.constraints import ConstraintKind, VersionConstraint, recommend, recommended_constraint
from toolinit.versioning import SemanticVersion, extract_all, select_latest


def test_pre_1_0_uses_minor_boundary() -> None:
    c = recommend(SemanticVersion(0, 9, 9))
    assert c.kind is ConstraintKind.UP_TO_NEXT_MINOR
    assert recommended_constraint(SemanticVersion(0, 9, 9)) == '.upToNextMinor(from: "0.9.9")'


def test_1_0_and_later_use_major_boundary() -> None:
    assert recommend(SemanticVersion(1, 0, 0)).kind is ConstraintKind.UP_TO_NEXT_MAJOR
    assert recommended_constraint(SemanticVersion(1, 0, 0)) == '.upToNextMajor(from: "1.0.0")'
    assert recommend(SemanticVersion(12, 3, 4)).kind is ConstraintKind.UP_TO_NEXT_MAJOR


def test_upper_bound() -> None:
    assert recommend(SemanticVersion(0, 3, 5)).upper_bound == SemanticVersion(0, 4, 0)
    assert recommend(SemanticVersion(1, 10, 0)).upper_bound == SemanticVersion(2, 0, 0)


def test_allows() -> None:
    minor = recommend(SemanticVersion(0, 3, 5))
    assert minor.allows(SemanticVersion(0, 3, 5))
    assert minor.allows(SemanticVersion(0, 3, 99))
    assert not minor.allows(SemanticVersion(0, 4, 0))
    assert not minor.allows(SemanticVersion(0, 3, 4))

    major = recommend(SemanticVersion(1, 10, 0))
    assert major.allows(SemanticVersion(1, 99, 0))
    assert not major.allows(SemanticVersion(2, 0, 0))


def test_str_matches_recommended_constraint() -> None:
    v = SemanticVersion(3, 1, 4)
    assert str(VersionConstraint(ConstraintKind.UP_TO_NEXT_MAJOR, v)) == recommended_constraint(v)


def test_tag_listing_to_major_constraint() -> None:
    latest = select_latest(extract_all("refs/tags/1.2.3 \nrefs/tags/1.10.0 \nrefs/tags/1.9.5 \n"))
    assert latest == SemanticVersion(1, 10, 0)
    assert recommended_constraint(latest) == '.upToNextMajor(from: "1.10.0")'


def test_tag_listing_to_minor_constraint() -> None:
    latest = select_latest(extract_all("refs/tags/0.3.5 \n"))
    assert recommended_constraint(latest) == '.upToNextMinor(from: "0.3.5")'
