import pytest

from obliv.ooption import OOption


def test_unwrap_returns_value():
    assert OOption(17, True).unwrap() == 17


def test_unwrap_none_raises():
    with pytest.raises(ValueError):
        OOption(17, False).unwrap()


def test_unwrap_or_default():
    assert OOption(5, True).unwrap_or_default(9) == 5
    assert OOption(5, False).unwrap_or_default(9) == 9


def test_default_is_none():
    opt = OOption()
    assert opt.is_some is False
    assert opt.unwrap_or_default(3) == 3


@pytest.mark.parametrize("choice", [False, True])
def test_cmov(choice):
    a = OOption(1, False)
    b = OOption(2, True)
    a.cmov(b, choice)
    expected = b if choice else OOption(1, False)
    assert a == expected
    assert b == OOption(2, True)


@pytest.mark.parametrize("choice", [False, True])
def test_cxchg(choice):
    a = OOption(1, False)
    b = OOption(2, True)
    a.cxchg(b, choice)
    if choice:
        assert (a, b) == (OOption(2, True), OOption(1, False))
    else:
        assert (a, b) == (OOption(1, False), OOption(2, True))


def test_cxchg_twice_restores():
    a = OOption(10, True)
    b = OOption(20, False)
    a.cxchg(b, True)
    a.cxchg(b, True)
    assert a == OOption(10, True)
    assert b == OOption(20, False)


def test_ordering_by_value_then_flag():
    assert OOption(1, True) < OOption(2, False)
    assert OOption(1, False) < OOption(1, True)
    assert sorted([OOption(3, True), OOption(1, True)]) == [OOption(1, True), OOption(3, True)]