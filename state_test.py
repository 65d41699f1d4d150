import pytest

from pll_trainer.notation import ParseError
from pll_trainer.state import ORIENTATIONS, CubeState, simulate, solved_state


# State Tests
def test_solved_state():
    cube = solved_state()
    assert cube.is_solved()
    assert cube.is_last_layer_only()
    assert len(set(cube.centers())) == 6


def test_single_move_changes_state():
    after_u = simulate('U')
    assert after_u != solved_state()
    assert not after_u.is_solved()


def test_inverse_cancels():
    assert simulate("U U'") == solved_state()
    assert simulate("M2 M2 r r'") == solved_state()


def test_sexy_move_six_times():
    """Known pattern: (R U R' U') six times is the identity"""
    assert simulate("(R U R' U')6") == solved_state()


def test_rotation_only_counts_as_solved():
    cube = simulate("x y2")
    assert cube.is_solved()
    assert cube != solved_state()


def test_normalize_undoes_rotation():
    assert simulate("x y2", normalize=True) == solved_state()
    assert simulate("U x", normalize=True) == simulate('U')
    assert simulate("R U x", normalize=True) == simulate('R U')


def test_slice_and_wide_match_face_turns():
    """M is the same as R L' x', r the same as L x"""
    assert simulate('M') == simulate("R L' x'")
    assert simulate('r') == simulate('L x')
    assert simulate("E'") == simulate("U' D y")
    assert simulate('S2') == simulate('F2 B2 z2')


def test_last_layer_only():
    assert simulate('U', normalize=True).is_last_layer_only()
    assert simulate('M2 U M2 U2 M2 U M2', normalize=True).is_last_layer_only()
    assert not simulate('R U', normalize=True).is_last_layer_only()
    assert not simulate('R U').is_last_layer_only()


def test_last_layer_compares_to_own_centers():
    """A rotated cube with only its top layer turned still counts"""
    assert simulate('x y U').is_last_layer_only()
    assert not simulate('x y R').is_last_layer_only()


def test_normalize_turns_changed_layer_on_top():
    """A single R turn is a last-layer pattern once R is on top"""
    state = simulate('R', normalize=True)
    assert state.is_last_layer_only()
    assert not state.is_solved()
    assert not simulate('R').is_last_layer_only()


def test_normalize_keeps_pattern_after_net_rotation():
    """The pattern stays on U when text ends with a whole-cube rotation"""
    state = simulate("M2 U M2 U2 M2 U M2 x'", normalize=True)
    assert state.is_last_layer_only()
    assert state == simulate('M2 U M2 U2 M2 U M2')


def test_orientations_cover_all_rotations():
    assert len(ORIENTATIONS) == 24
    states = [simulate(rotation) for rotation in ORIENTATIONS]
    centers = {tuple(s.centers()) for s in states}
    assert len(centers) == 24


def test_unknown_move_cannot_be_simulated():
    with pytest.raises(ParseError):
        simulate('R Q')


def test_to_string():
    text = solved_state().to_string()
    assert len(text.splitlines()) == 11
    assert isinstance(solved_state(), CubeState)
