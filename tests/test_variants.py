import pytest
from django.core.exceptions import ValidationError

from catalog_app.domain import VariantSelection
from catalog_app.variants import (
    BlockReason,
    can_enquire,
    color_required,
    explain_block,
    fabric_required,
    unknown_options,
    validate_color_code,
)

from .conftest import colors, fabrics, make_product, sizes


def test_product_without_options_needs_nothing():
    p = make_product()
    assert not fabric_required(p)
    assert not color_required(p)
    assert can_enquire(p, VariantSelection())
    assert explain_block(p, VariantSelection()) == BlockReason.NONE


def test_two_fabrics_no_colors_needs_only_a_fabric():
    p = make_product(fabrics=fabrics("Velvet", "Linen"))
    assert fabric_required(p)
    assert not color_required(p)

    assert not can_enquire(p, VariantSelection())
    assert explain_block(p, VariantSelection()) == BlockReason.NEEDS_FABRIC

    assert can_enquire(p, VariantSelection(fabric="Velvet"))
    # color has no say when the product offers none
    assert not can_enquire(p, VariantSelection(color="Teal"))
    assert can_enquire(p, VariantSelection(fabric="Linen", color="Teal"))


def test_fabric_and_color_explain_block():
    p = make_product(fabrics=fabrics("Velvet"), colors=colors("Teal"))
    assert explain_block(p, VariantSelection()) == BlockReason.NEEDS_BOTH
    assert explain_block(p, VariantSelection(fabric="Velvet")) == BlockReason.NEEDS_COLOR
    assert explain_block(p, VariantSelection(color="Teal")) == BlockReason.NEEDS_FABRIC
    assert explain_block(p, VariantSelection(fabric="Velvet", color="Teal")) == BlockReason.NONE
    assert str(BlockReason.NEEDS_BOTH) == "needs-both"


def test_sizes_never_block():
    p = make_product(sizes=sizes("2 seater", "3 seater"))
    assert can_enquire(p, VariantSelection())


def test_unknown_options_reports_each_field():
    p = make_product(fabrics=fabrics("Velvet"), colors=colors("Teal"), sizes=sizes("Queen"))
    selection = VariantSelection(fabric="Silk", color="Teal", size="King")
    errors = unknown_options(p, selection)
    assert set(errors) == {"fabric", "size"}
    assert unknown_options(p, VariantSelection(fabric="Velvet")) == {}


@pytest.mark.parametrize("code", ["#A1B2C3", "#ffffff", "#000000", "#aBcDeF"])
def test_valid_color_codes(code):
    validate_color_code(code)


@pytest.mark.parametrize("code", ["A1B2C3", "#FFF", "#GGGGGG", "#A1B2C3D", "#a1b2c3\n", "", None])
def test_invalid_color_codes(code):
    with pytest.raises(ValidationError):
        validate_color_code(code)
