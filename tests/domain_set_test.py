import pytest

from test_utils import Color
from python_subsets.domain_set import DomainSet


def test_none_and_all_of():
    empty = DomainSet.none_of(Color)
    assert len(empty) == 0
    assert empty.domain == (Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW)
    full = DomainSet.all_of(Color)
    assert list(full) == list(Color)
    assert full.bits == 0b1111


def test_iteration_follows_domain_order():
    s = DomainSet.of(Color, Color.YELLOW, Color.RED, Color.BLUE)
    assert list(s) == [Color.RED, Color.BLUE, Color.YELLOW]
    assert s.bits == 0b1101
    assert repr(s) == "DomainSet([<Color.RED: 1>, <Color.BLUE: 3>, <Color.YELLOW: 4>])"


def test_add_and_discard():
    s = DomainSet.none_of(Color)
    s.add(Color.GREEN)
    s.add(Color.GREEN)
    assert len(s) == 1
    assert Color.GREEN in s
    s.discard(Color.GREEN)
    s.discard(Color.GREEN)
    assert Color.GREEN not in s
    s |= {Color.RED, Color.BLUE}
    assert s == {Color.RED, Color.BLUE}
    s.clear()
    assert not s


def test_values_outside_the_domain():
    s = DomainSet(['a', 'b'])
    with pytest.raises(ValueError):
        s.add('c')
    assert 'c' not in s
    assert [] not in s
    s.discard('c')


def test_domain_members_must_be_distinct():
    with pytest.raises(ValueError):
        DomainSet(['a', 'b', 'a'])


def test_equality_and_copies():
    s = DomainSet.of('xyz', 'z', 'x')
    assert s == {'x', 'z'}
    assert {'x', 'z'} == s
    assert s != DomainSet.of('xyz', 'x')
    copy = s.empty_copy()
    assert len(copy) == 0
    assert copy.same_domain(s)
    assert not copy.same_domain(DomainSet('xy'))
    copy.add('y')
    assert 'y' not in s


def test_not_hashable():
    with pytest.raises(TypeError):
        hash(DomainSet.none_of(Color))
