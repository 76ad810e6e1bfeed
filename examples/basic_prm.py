"""Example demonstrating roadmap planning for a point robot in a walled square."""

import logging
import numpy as np

from prmplanning import BaseEnvironment, ClassicPRM, PlannerParameters
from prmplanning.utils import path_cost


class WalledSquare(BaseEnvironment):
    """10x10 square with a wall at x=4..6 that leaves a gap near the top."""

    def get_active_dof(self):
        return 2

    def get_joint_limits(self):
        return np.zeros(2), np.full(2, 10.0)

    def is_collision_free(self, configuration):
        x, y = configuration
        if not (0.0 <= x <= 10.0 and 0.0 <= y <= 10.0):
            return False
        return not (4.0 <= x <= 6.0 and y <= 8.0)


def main():
    logging.basicConfig(level=logging.INFO)

    env = WalledSquare()
    planner = ClassicPRM(env)
    planner.add_observer(lambda event: print(f"[{event.source}] {event.name} {event.data}"))

    print("Building roadmap...")
    planner.init_plan(PlannerParameters(max_nodes=300, neighbor_threshold=1.5,
                                        roadmap_dump_path="classicprm_roadmap.gml"))

    start_config = np.array([1.0, 1.0])
    goal_config = np.array([9.0, 1.0])
    print(f"\nStart configuration: {start_config}")
    print(f"Goal configuration: {goal_config}")

    path = planner.plan(start_config, goal_config)
    if path is None:
        print("\nFailed to find a path!")
        return

    print(f"\nPath found with {len(path)} waypoints, cost {path_cost(path):.3f}")
    smoothed = planner.smooth_path(path, max_iterations=50)
    print(f"Path smoothed: {len(path)} -> {len(smoothed)} waypoints, cost {path_cost(smoothed):.3f}")
    for config in smoothed:
        print(f"  {np.round(config, 3)}")


if __name__ == "__main__":
    main()
