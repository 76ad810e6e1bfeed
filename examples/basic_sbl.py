"""Example demonstrating bidirectional tree planning for a planar two-link arm in MuJoCo."""

import numpy as np

from prmplanning import MujocoEnvironment, PlannerParameters, SBLPlanner, Trajectory

ARM_XML = """
<mujoco model="planar_arm">
  <worldbody>
    <body name="link1" pos="0 0 0">
      <joint name="shoulder" type="hinge" axis="0 0 1" limited="true" range="-3.14 3.14"/>
      <geom type="capsule" fromto="0 0 0 1 0 0" size="0.05"/>
      <body name="link2" pos="1 0 0">
        <joint name="elbow" type="hinge" axis="0 0 1" limited="true" range="-2.5 2.5"/>
        <geom type="capsule" fromto="0 0 0 0.8 0 0" size="0.05"/>
      </body>
    </body>
    <body name="pillar" pos="1.2 0.9 0">
      <geom type="box" size="0.15 0.15 0.5"/>
    </body>
  </worldbody>
</mujoco>
"""


def main():
    print("Initializing environment...")
    env = MujocoEnvironment.from_xml_string(ARM_XML, collision_resolution=0.02)

    print("Creating motion planner...")
    planner = SBLPlanner(env)
    planner.init_plan(PlannerParameters(step_length=0.1, max_iterations=5000))

    start_config = np.array([-0.5, 0.3])
    goal_config = np.array([2.0, -0.3])
    print(f"\nStart configuration: {start_config}")
    print(f"Goal configuration: {goal_config}")

    print("\n" + "=" * 60)
    path = planner.plan(start_config, goal_config)
    print("=" * 60)

    if path is None:
        print("\nFailed to find a path!")
        return

    print(f"\nPath found with {len(path)} waypoints")
    smoothed = planner.smooth_path(path, max_iterations=100)
    interpolated = Trajectory(smoothed).interpolate(step_size=0.05)
    print(f"Path smoothed: {len(path)} -> {len(smoothed)} waypoints")
    print(f"Path interpolated: {len(smoothed)} -> {len(interpolated)} waypoints")


if __name__ == "__main__":
    main()
