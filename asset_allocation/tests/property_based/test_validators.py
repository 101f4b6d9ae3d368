"""
Property-Based Testing for Factories and Identifiers

Using Hypothesis to explore the validation rules and identifier ordering
over generated inputs.
"""

from decimal import Decimal

from hypothesis import given, settings, strategies as st

from asset_allocation.domain.allocation.factories import AssetFactory, CentreFactory
from asset_allocation.domain.allocation.value_objects.identifiers import (
    IdentifierGenerator,
    UlidGenerator,
    ulid_timestamp_ms,
)
from asset_allocation.tests.utils.payloads import address_fields, centre_fields


@st.composite
def names(draw):
    """Non-blank display names."""
    text = draw(st.text(min_size=1, max_size=40))
    return text if text.strip() else f"Panel {text}"


positive_sizes = st.floats(
    min_value=1e-6, max_value=1e6, allow_nan=False, allow_infinity=False
)
non_positive_sizes = st.one_of(
    st.floats(max_value=0, allow_nan=False, allow_infinity=False),
    st.integers(max_value=0),
)
blank_text = st.text(alphabet=" \t\n", max_size=5)


class _Counter(IdentifierGenerator):
    def __init__(self):
        self.value = 0

    def next(self) -> str:
        self.value += 1
        return f"ID{self.value}"


@given(name=names(), length=positive_sizes, breadth=positive_sizes, depth=positive_sizes)
def test_valid_asset_fields_always_build(name, length, breadth, depth):
    fields = {"name": name, "length": length, "breadth": breadth, "depth": depth}

    assert AssetFactory(_Counter()).validate(fields) == []
    asset = AssetFactory(_Counter()).create(fields)
    assert asset.dimensions.length == length
    assert asset.name == name.strip()


@given(
    field=st.sampled_from(["length", "breadth", "depth"]),
    bad=st.one_of(non_positive_sizes, st.just(float("nan")), st.just(float("-inf"))),
)
def test_non_positive_or_non_finite_dimension_is_rejected(field, bad):
    fields = {"name": "Panel", "length": 1.0, "breadth": 1.0, "depth": 1.0, field: bad}

    errors = AssetFactory(_Counter()).validate(fields)

    assert [(e.field_name, e.error_code) for e in errors] == [(field, "NOT_POSITIVE")]


@given(
    field=st.sampled_from(["line_one", "city", "state", "postal_code", "country"]),
    blank=blank_text,
)
def test_blank_required_address_line_is_rejected(field, blank):
    fields = centre_fields()
    fields["address"] = address_fields(**{field: blank})

    errors = CentreFactory(_Counter()).validate(fields)

    assert [e.field_name for e in errors] == [f"address.{field}"]


@settings(max_examples=50)
@given(ticks=st.lists(st.integers(min_value=0, max_value=2**40), min_size=1, max_size=30))
def test_ulids_strictly_increase_for_any_clock(ticks):
    clock = iter(ticks)
    generator = UlidGenerator(clock_ms=lambda: next(clock))

    issued = [generator.next() for _ in ticks]

    assert all(a < b for a, b in zip(issued, issued[1:]))
    assert ulid_timestamp_ms(issued[-1]) == max(ticks)


@given(
    field=st.sampled_from(["length", "breadth", "depth"]),
    bad=st.one_of(
        st.integers(min_value=2**1024, max_value=10**1000),
        st.integers(min_value=-(10**1000), max_value=-(2**1024)),
        st.just(Decimal("sNaN")),
    ),
)
def test_dimension_outside_float_range_is_reported_not_raised(field, bad):
    fields = {"name": "Panel", "length": 1.0, "breadth": 1.0, "depth": 1.0, field: bad}

    errors = AssetFactory(_Counter()).validate(fields)

    assert [(e.field_name, e.error_code) for e in errors] == [(field, "NOT_FINITE")]
