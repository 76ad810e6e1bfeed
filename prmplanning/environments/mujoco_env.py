"""MuJoCo-backed planning environment."""

import mujoco
import numpy as np
from typing import Iterable, List, Optional, Tuple

from prmplanning.core.base_env import BaseEnvironment, DEFAULT_COLLISION_RESOLUTION

PENETRATION_TOLERANCE = 1e-4


class MujocoEnvironment(BaseEnvironment):
    """
    Validity oracle and robot model for a MuJoCo scene.

    The first ``dof`` entries of ``qpos`` form the planning configuration.
    A contact counts as a collision when exactly one of its bodies is in
    ``collision_bodies`` and the penetration is deeper than the tolerance.
    """

    def __init__(
        self,
        model: mujoco.MjModel,
        dof: Optional[int] = None,
        collision_bodies: Optional[Iterable[str]] = None,
        collision_resolution: float = DEFAULT_COLLISION_RESOLUTION
    ):
        super().__init__(collision_resolution)
        self.model = model
        self.data = mujoco.MjData(self.model)
        self.dof = dof if dof is not None else self.model.nq
        if not 0 < self.dof <= self.model.nq:
            raise ValueError(f"dof must be in [1, {self.model.nq}], got {self.dof}")

        # List of body names to check for collisions
        if collision_bodies is not None:
            self.collision_bodies = list(collision_bodies)
        else:
            self.collision_bodies = [
                self.model.body(i).name for i in range(1, self.model.nbody)
                if self.model.body_jntnum[i] > 0
            ]
        self.collision_exceptions: List[str] = []

        mujoco.mj_forward(self.model, self.data)

    @classmethod
    def from_xml_path(cls, path: str, **kwargs) -> "MujocoEnvironment":
        return cls(mujoco.MjModel.from_xml_path(path), **kwargs)

    @classmethod
    def from_xml_string(cls, xml: str, **kwargs) -> "MujocoEnvironment":
        return cls(mujoco.MjModel.from_xml_string(xml), **kwargs)

    def get_active_dof(self) -> int:
        return self.dof

    def get_joint_limits(self) -> Tuple[np.ndarray, np.ndarray]:
        low = np.full(self.dof, -np.pi)
        high = np.full(self.dof, np.pi)
        for joint_id in range(self.model.njnt):
            address = self.model.jnt_qposadr[joint_id]
            if address < self.dof and self.model.jnt_limited[joint_id]:
                low[address], high[address] = self.model.jnt_range[joint_id]
        return low, high

    def add_collision_exception(self, body_name: str):
        if body_name not in self.collision_exceptions:
            self.collision_exceptions.append(body_name)

    def remove_collision_exception(self, body_name: str):
        if body_name in self.collision_exceptions:
            self.collision_exceptions.remove(body_name)

    def clear_collision_exceptions(self):
        self.collision_exceptions = []

    def check_collisions(self) -> bool:
        collision_free = True
        for i in range(self.data.ncon):
            contact = self.data.contact[i]
            name1 = self.model.body(self.model.geom_bodyid[contact.geom1]).name
            name2 = self.model.body(self.model.geom_bodyid[contact.geom2]).name

            if name1 in self.collision_exceptions or name2 in self.collision_exceptions:
                continue
            if name1 in self.collision_bodies and name2 in self.collision_bodies:
                continue
            if name1 not in self.collision_bodies and name2 not in self.collision_bodies:
                continue
            if contact.dist < -PENETRATION_TOLERANCE:
                collision_free = False
                break
        return collision_free

    def is_collision_free(self, configuration: np.ndarray) -> bool:
        configuration = np.asarray(configuration, dtype=np.float64)
        if configuration.shape != (self.dof,):
            raise ValueError(f"Expected a configuration of shape ({self.dof},), got {configuration.shape}")

        with self.mutex:
            qpos_save = self.data.qpos.copy()
            qvel_save = self.data.qvel.copy()

            self.data.qpos[:self.dof] = configuration
            self.data.qvel[:] = 0.0
            mujoco.mj_forward(self.model, self.data)

            collision_free = self.check_collisions()

            self.data.qpos[:] = qpos_save
            self.data.qvel[:] = qvel_save
            mujoco.mj_forward(self.model, self.data)

        return collision_free
