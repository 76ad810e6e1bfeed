"""tests/test_utils.py - parameters, sampler, trajectory, events and path helpers"""
import numpy as np
import pytest

from prmplanning.core.configuration import as_configuration, euclidean_distance
from prmplanning.core.params import PlannerParameters
from prmplanning.planners.sbl_planner import SBLPlanner
from prmplanning.samplers.random_sampler import RandomSampler
from prmplanning.trajectories.trajectory import Trajectory
from prmplanning.utils.path_utils import path_cost, smooth_path

from conftest import BoxWorld


class TestPlannerParameters:

    def test_defaults(self):
        params = PlannerParameters()
        assert params.max_nodes == 100
        assert params.neighbor_threshold == 5.0
        assert params.step_length == 0.04
        assert params.start_config is None

    @pytest.mark.parametrize("kwargs", [
        {"max_nodes": -1},
        {"neighbor_threshold": 0.0},
        {"step_length": -0.1},
        {"max_iterations": -5},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            PlannerParameters(**kwargs)

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError):
            PlannerParameters.from_dict({"max_nodes": 10, "n_edges": 4})

    def test_with_query(self):
        params = PlannerParameters.from_dict({"max_nodes": 10, "max_iterations": None})
        query = params.with_query([0.0, 1.0], [2.0, 3.0])
        assert query.max_nodes == 10
        assert query.max_iterations is None
        np.testing.assert_array_equal(query.goal_config, [2.0, 3.0])
        assert params.goal_config is None
        assert query.to_dict()["start_config"] == [0.0, 1.0]


class TestConfiguration:

    def test_dimension_check(self):
        assert as_configuration([1, 2, 3], dof=3).dtype == np.float64
        with pytest.raises(ValueError):
            as_configuration([1, 2], dof=3)

    def test_distance(self):
        assert euclidean_distance(np.array([0.0, 0.0]), np.array([3.0, 4.0])) == pytest.approx(5.0)


class TestRandomSampler:

    def test_samples_inside_limits(self, free_world):
        sampler = RandomSampler(free_world, seed=0)
        for _ in range(50):
            config = sampler.sample()
            assert np.all(config >= 0.0) and np.all(config <= 10.0)

    def test_colliding_samples_fail(self):
        env = BoxWorld([0.0], [1.0], obstacles=[([0.0], [1.0])])
        sampler = RandomSampler(env, seed=0)
        assert sampler.sample() is None

    def test_invalid_bounds(self, free_world):
        with pytest.raises(ValueError):
            RandomSampler(free_world, lower=[1.0, 1.0], upper=[0.0, 2.0])


class TestTrajectory:

    def test_points_are_copied(self):
        point = np.array([1.0, 2.0])
        trajectory = Trajectory()
        trajectory.add_point(point)
        point[0] = 5.0
        assert trajectory.get_points()[0][0] == 1.0
        assert len(trajectory) == 1

    def test_interpolate_by_step_size(self):
        trajectory = Trajectory([np.array([0.0]), np.array([1.0])])
        dense = trajectory.interpolate(step_size=0.25)
        np.testing.assert_allclose(np.concatenate(dense.get_points()), [0.0, 0.25, 0.5, 0.75, 1.0])

    def test_interpolate_by_segment_count(self):
        trajectory = Trajectory([np.array([0.0, 0.0]), np.array([2.0, 0.0]), np.array([2.0, 1.0])])
        dense = trajectory.interpolate(steps_per_segment=2).get_points()
        assert len(dense) == 5
        np.testing.assert_allclose(dense[1], [1.0, 0.0])
        np.testing.assert_allclose(dense[3], [2.0, 0.5])

    def test_linear_points(self):
        start, end = np.array([0.0, 0.0]), np.array([1.0, 1.0])
        points = Trajectory.interpolate_linear_points(start, end, step_size=0.5)
        assert len(points) == 4
        np.testing.assert_allclose(points[0], start)
        np.testing.assert_allclose(points[-1], end)
        for a, b in zip(points[:-1], points[1:]):
            assert np.linalg.norm(b - a) <= 0.5

        assert len(Trajectory.interpolate_linear_points(start, end, steps=4)) == 5
        assert len(Trajectory.interpolate_linear_points(start, start, step_size=0.5)) == 2

    def test_clear(self):
        trajectory = Trajectory([np.array([0.0])])
        trajectory.clear()
        assert len(trajectory) == 0


class TestEvents:

    def test_observers_start_empty_per_planner(self, free_world, event_log):
        first = SBLPlanner(free_world)
        second = SBLPlanner(free_world)
        first.add_observer(event_log)
        first.emit("ping", value=1)
        second.emit("ping", value=2)
        event, = event_log.events
        assert event.source == "SBLPlanner"
        assert event.data == {"value": 1}

    def test_removed_observer_is_not_called(self, free_world, event_log):
        planner = SBLPlanner(free_world)
        planner.add_observer(event_log)
        planner.remove_observer(event_log)
        planner.remove_observer(event_log)
        planner.emit("ping")
        assert event_log.events == []


class TestPathUtils:

    def test_path_cost(self):
        path = [np.array([0.0, 0.0]), np.array([3.0, 4.0]), np.array([3.0, 5.0])]
        assert path_cost(path) == pytest.approx(6.0)
        assert path_cost(path[:1]) == 0.0

    def test_smooth_in_free_space(self, free_world):
        path = [np.array([float(i), 1.0]) for i in range(6)]
        smoothed = smooth_path(path, free_world.segment_free, rng=np.random.default_rng(0))
        assert len(smoothed) == 2
        np.testing.assert_allclose(smoothed[0], path[0])
        np.testing.assert_allclose(smoothed[-1], path[-1])

    def test_smooth_keeps_blocked_corner(self, wall_world):
        path = [np.array([3.0, 1.0]), np.array([3.0, 9.0]), np.array([7.0, 9.0]), np.array([7.0, 1.0])]
        smoothed = smooth_path(path, wall_world.segment_free, rng=np.random.default_rng(0))
        for a, b in zip(smoothed[:-1], smoothed[1:]):
            assert wall_world.segment_free(a, b)
