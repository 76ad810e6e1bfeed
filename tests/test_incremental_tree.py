"""tests/test_incremental_tree.py - IncrementalTree growth and invariants"""
import numpy as np
import pytest

from prmplanning.core.base_projector import BaseConstraintProjector
from prmplanning.spatial.incremental_tree import ExtendResult, IncrementalTree, TreeContext

from conftest import BoxWorld


def _tree(env, step_length=1.0, projector=None):
    context = TreeContext(
        dof=env.get_active_dof(),
        segment_free=env.segment_free,
        step_length=step_length,
        projector=projector,
    )
    return IncrementalTree(context)


@pytest.fixture
def line_world():
    return BoxWorld([-20.0], [20.0])


@pytest.fixture
def blocked_line_world():
    """1-D line with an obstacle between 1.5 and 2.5."""
    return BoxWorld([-20.0], [20.0], obstacles=[([1.5], [2.5])])


class FlattenY(BaseConstraintProjector):
    """Keeps the second coordinate at zero."""

    def project(self, from_config, config):
        config[1] = 0.0
        return True


class RejectAll(BaseConstraintProjector):

    def project(self, from_config, config):
        return False


class Stuck(BaseConstraintProjector):
    """Moves every candidate back onto its origin."""

    def project(self, from_config, config):
        config[:] = from_config
        return True


class TestNearestNode:

    def test_empty_tree(self, line_world):
        tree = _tree(line_world)
        assert tree.nearest_node(np.array([1.0])) is None

    def test_returns_closest_and_records_distance(self, line_world):
        tree = _tree(line_world)
        tree.add_node(None, [0.0])
        tree.add_node(0, [3.0])
        tree.add_node(1, [7.0])
        assert tree.nearest_node(np.array([4.0])) == 1
        assert tree.best_distance == pytest.approx(1.0)

    def test_first_index_wins_ties(self, line_world):
        tree = _tree(line_world)
        tree.add_node(None, [0.0])
        tree.add_node(0, [2.0])
        assert tree.nearest_node(np.array([1.0])) == 0


class TestExtend:

    def test_empty_tree_fails(self, line_world):
        tree = _tree(line_world)
        assert tree.extend(np.array([1.0])) == (ExtendResult.FAILED, None)

    def test_blocked_after_first_step(self, blocked_line_world):
        tree = _tree(blocked_line_world, step_length=1.0)
        tree.add_node(None, [0.0])
        result, index = tree.extend(np.array([10.0]))
        assert result == ExtendResult.REACHED
        assert index == 1
        assert len(tree) == 2
        np.testing.assert_allclose(tree.get_config(1), [1.0])
        assert tree.nodes[1].parent == 0

    def test_reaches_target_in_free_space(self, line_world):
        tree = _tree(line_world, step_length=1.0)
        tree.add_node(None, [0.0])
        result, index = tree.extend(np.array([10.0]))
        assert result == ExtendResult.CONNECTED
        assert len(tree) == 11
        assert index == len(tree) - 1
        np.testing.assert_allclose(tree.get_config(index), [10.0], atol=0.1)

    def test_steps_never_exceed_step_length(self, free_world):
        tree = _tree(free_world, step_length=0.3)
        tree.add_node(None, [1.0, 1.0])
        tree.extend(np.array([8.0, 5.0]))
        for node in tree.nodes[1:]:
            parent = tree.get_config(node.parent)
            assert np.linalg.norm(node.config - parent) <= 0.3 + 1e-9

    def test_single_step(self, line_world):
        tree = _tree(line_world, step_length=1.0)
        tree.add_node(None, [0.0])
        result, index = tree.extend(np.array([10.0]), single_step=True)
        assert result == ExtendResult.CONNECTED
        assert len(tree) == 2
        np.testing.assert_allclose(tree.get_config(index), [1.0])

    def test_target_within_tolerance_connects_without_nodes(self, line_world):
        tree = _tree(line_world, step_length=1.0)
        tree.add_node(None, [0.0])
        result, index = tree.extend(np.array([0.05]))
        assert result == ExtendResult.CONNECTED
        assert index == 0
        assert len(tree) == 1

    def test_blocked_immediately_fails(self, blocked_line_world):
        tree = _tree(blocked_line_world, step_length=1.0)
        tree.add_node(None, [1.2])
        result, index = tree.extend(np.array([10.0]))
        assert result == ExtendResult.FAILED
        assert index == 0
        assert len(tree) == 1

    def test_projector_rejection_fails(self, free_world):
        tree = _tree(free_world, step_length=0.5, projector=RejectAll())
        tree.add_node(None, [1.0, 1.0])
        assert tree.extend(np.array([5.0, 5.0])) == (ExtendResult.FAILED, 0)

    def test_projector_without_progress_fails(self, free_world):
        tree = _tree(free_world, step_length=0.5, projector=Stuck())
        tree.add_node(None, [1.0, 1.0])
        assert tree.extend(np.array([5.0, 5.0])) == (ExtendResult.FAILED, 0)
        assert len(tree) == 1

    def test_projector_constrains_growth(self, free_world):
        tree = _tree(free_world, step_length=0.5, projector=FlattenY())
        tree.add_node(None, [0.0, 0.0])
        result, index = tree.extend(np.array([5.0, 1.0]))
        assert result == ExtendResult.REACHED
        assert all(node.config[1] == 0.0 for node in tree.nodes)
        assert tree.get_config(index)[0] == pytest.approx(5.0, abs=0.02)


class TestTreeStructure:

    def test_invalid_parent_raises(self, line_world):
        tree = _tree(line_world)
        tree.add_node(None, [0.0])
        with pytest.raises(IndexError):
            tree.add_node(3, [1.0])
        with pytest.raises(IndexError):
            tree.add_node(1, [1.0])

    def test_dimension_mismatch_raises(self, line_world):
        tree = _tree(line_world)
        with pytest.raises(ValueError):
            tree.add_node(None, [0.0, 1.0])

    def test_invalid_index_raises(self, line_world):
        tree = _tree(line_world)
        tree.add_node(None, [0.0])
        with pytest.raises(IndexError):
            tree.get_config(1)
        with pytest.raises(IndexError):
            tree.get_config(-1)

    def test_path_to_root(self, line_world):
        tree = _tree(line_world, step_length=1.0)
        tree.add_node(None, [0.0])
        tree.extend(np.array([3.0]))
        path = tree.path_to_root(len(tree) - 1)
        np.testing.assert_allclose(np.concatenate(path), [0.0, 1.0, 2.0, 3.0], atol=1e-9)

    def test_random_growth_stays_acyclic(self, wall_world):
        rng = np.random.default_rng(5)
        tree = _tree(wall_world, step_length=0.4)
        tree.add_node(None, [1.0, 1.0])
        for _ in range(200):
            tree.extend(rng.uniform(0.0, 10.0, size=2))

        for index, node in enumerate(tree.nodes):
            if node.parent is not None:
                assert node.parent < index
            steps = 0
            current = index
            while tree.nodes[current].parent is not None:
                current = tree.nodes[current].parent
                steps += 1
                assert steps <= len(tree)
            assert current == 0
