"""
Property tests for the rule analyzers, checked against direct recursive
definitions over the raw (unopened) lhs.
"""

from hypothesis import given

from lp_kernel.core.term import Abst, Appl, Bound, Patt, Symb, Vari

from lp_stats.engine.analyze import analyze_rule

from .strategies import rules


def _leaves_and_binders(t) -> int:
    if isinstance(t, Appl):
        return _leaves_and_binders(t.fn) + _leaves_and_binders(t.arg)
    if isinstance(t, Abst):
        return 1 + _leaves_and_binders(t.body)
    assert isinstance(t, (Symb, Vari, Patt, Bound))
    return 1


def _raw_depth(t) -> int:
    if isinstance(t, Appl):
        return 1 + max(_raw_depth(t.fn), _raw_depth(t.arg))
    if isinstance(t, Abst):
        return 1 + _raw_depth(t.body)
    return 0


def _all_slots(t):
    if isinstance(t, Patt):
        return [] if t.slot is None else [t.slot]
    if isinstance(t, Appl):
        return _all_slots(t.fn) + _all_slots(t.arg)
    if isinstance(t, Abst):
        return _all_slots(t.body)
    return []


def _contains_abst(t) -> bool:
    if isinstance(t, Abst):
        return True
    if isinstance(t, Appl):
        return _contains_abst(t.fn) or _contains_abst(t.arg)
    return False


@given(rules)
def test_size_at_least_arity_and_height_non_negative(r):
    m = analyze_rule(r)
    assert m.size >= m.arity >= 0
    assert m.height >= 0


@given(rules)
def test_size_counts_leaves_and_binders(r):
    assert analyze_rule(r).size == sum(_leaves_and_binders(t) for t in r.lhs)


@given(rules)
def test_height_is_depth_of_the_argument_spine(r):
    n = len(r.lhs)
    # depth of KIND a1 ... an is max(n, n - i + 1 + depth(ai))
    depth = max([n] + [n - i + depth_i for i, depth_i in enumerate((_raw_depth(a) for a in r.lhs))])
    assert analyze_rule(r).height == max(depth - 1, 0)


@given(rules)
def test_nonlinear_iff_some_slot_repeats(r):
    slots = [s for t in r.lhs for s in _all_slots(t)]
    repeated = any(slots.count(s) > 1 for s in slots)
    assert analyze_rule(r).nonlinear == repeated


@given(rules)
def test_higher_order_iff_abstraction_somewhere(r):
    assert analyze_rule(r).higher_order == any(_contains_abst(t) for t in r.lhs)
