import pytest

from rustlings.exercises.traits import (
    Licensed,
    OtherSoftware,
    SomeSoftware,
    append_bar,
    compare_license_types,
)


def test_is_foo_bar():
    assert append_bar("Foo") == "FooBar"


def test_is_bar_bar():
    assert append_bar(append_bar("")) == "BarBar"


def test_is_vec_pop_eq_bar():
    foo = append_bar(["Foo"])
    assert foo.pop() == "Bar"
    assert foo.pop() == "Foo"
    assert foo == []


def test_append_bar_leaves_list_untouched():
    original = ["Foo"]
    append_bar(original)
    assert original == ["Foo"]


def test_append_bar_rejects_other_types():
    with pytest.raises(TypeError):
        append_bar(3)


def test_default_licensing_info():
    assert SomeSoftware().licensing_info() == "some information"


def test_compare_license_information():
    assert compare_license_types(SomeSoftware(), OtherSoftware()) is True


def test_compare_license_information_backwards():
    assert compare_license_types(OtherSoftware(), SomeSoftware()) is True


def test_compare_different_license_information():
    class Custom(Licensed):
        def licensing_info(self):
            return "other information"

    assert compare_license_types(SomeSoftware(), Custom()) is False