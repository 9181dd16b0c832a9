# mini_spine/model.py
"""
SPINE MODEL: Build Once, Step Forever
=====================================

PURPOSE:
--------
SpineModel ties the pipeline together and is the object a simulation loop
and its controllers talk to:

    parameters -> assemble_spine -> BuilderRegistry + realize
               -> rods, cables -> SymbolicIndex

setup() runs the whole pipeline and commits the result only when every
phase succeeded. step(dt) validates dt, lets observers (controllers) act
for the step, then advances every instance.

USAGE:
------
    model = SpineModel(SpineParams(segments=2))
    model.attach(my_controller)
    model.setup(world)
    for _ in range(1000):
        model.step(0.001)
    cables = model.get_instances("saddle 0")
"""

import logging
from typing import Dict, List, Mapping, Optional, Protocol, Tuple

from .build.instances import Rod, SpringCable
from .build.realize import filter_instances, realize
from .build.registry import BuilderRegistry, CableBuilder, RodBuilder
from .config import SpineConfig, SpineParams
from .generative.spine import SpineLayout, assemble_spine
from .generative.vertebra import ROD, ROD_B
from .index import SymbolicIndex, spine_index_keys
from .kernel.errors import InvalidTimeStep, SpineNotBuiltError
from .kernel.graph import StructureGraph

logger = logging.getLogger(__name__)

CABLE = "muscle"


class SimulationWorld(Protocol):
    """
    The engine side: anything that can take ownership of an instance.

    An optional ``remove(instance)`` lets a failed setup take back what it
    already handed over.
    """

    def add(self, instance: object) -> None:
        ...


class SpineObserver:
    """Base class for controllers; override the hooks you need."""

    def on_setup(self, model: "SpineModel") -> None:
        pass

    def on_step(self, model: "SpineModel", dt: float) -> None:
        pass

    def on_teardown(self, model: "SpineModel") -> None:
        pass


def spine_registry(config: SpineConfig) -> BuilderRegistry:
    """Registry covering every edge class a spine graph contains."""
    registry = BuilderRegistry()
    registry.add_builder(ROD, RodBuilder(), config.moving_rod)
    registry.add_builder(ROD_B, RodBuilder(), config.base_rod)
    registry.add_builder(CABLE, CableBuilder(), config.cable)
    return registry


class SpineModel:
    """A generated spine with named access to its cables."""

    def __init__(
        self,
        params: Optional[SpineParams] = None,
        config: Optional[SpineConfig] = None,
        index_keys: Optional[Mapping[str, str]] = None,
    ):
        self.params = params if params is not None else SpineParams()
        self.config = config if config is not None else SpineConfig()
        self._index_keys = dict(index_keys) if index_keys is not None else None
        self._observers: List[SpineObserver] = []
        self._layout: Optional[SpineLayout] = None
        self._instances: Tuple[object, ...] = ()
        self._rods: Tuple[Rod, ...] = ()
        self._index: Optional[SymbolicIndex] = None
        self.time = 0.0

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def attach(self, observer: SpineObserver) -> None:
        self._observers.append(observer)

    def detach(self, observer: SpineObserver) -> None:
        self._observers.remove(observer)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def index_keys(self) -> Dict[str, str]:
        if self._index_keys is not None:
            return dict(self._index_keys)
        return spine_index_keys(self.params.segments)

    def setup(self, world: Optional[SimulationWorld] = None) -> None:
        """
        Generate, realize and index the spine.

        Construction errors leave the model and ``world`` untouched. The new
        structure is visible to observers during ``on_setup``; if an
        observer or ``world.add`` raises, the model reverts to its previous
        state. Instances already handed over are taken back through
        ``world.remove`` when the world has one; a world without ``remove``
        keeps them.

        Raises:
            SpineBuildError: any construction failure
        """
        layout = assemble_spine(self.params)
        instances = realize(layout.graph, spine_registry(self.config))
        rods = filter_instances(instances, Rod)
        cables = filter_instances(instances, SpringCable)
        index = SymbolicIndex.build(cables, self.index_keys())

        previous = self._state()
        self._restore((layout, tuple(instances), tuple(rods), index, 0.0))
        added = []
        try:
            for observer in list(self._observers):
                observer.on_setup(self)
            if world is not None:
                for instance in self._instances:
                    world.add(instance)
                    added.append(instance)
        except Exception:
            self._restore(previous)
            remove = getattr(world, "remove", None)
            if remove is not None:
                for instance in reversed(added):
                    remove(instance)
            logger.warning("Spine setup aborted, %d instances were handed to the world", len(added))
            raise

        logger.info(
            "Spine ready: %d vertebrae, %d rods, %d cables, %d index keys",
            len(layout.modules), len(rods), len(cables), len(index),
        )

    def _state(self):
        return self._layout, self._instances, self._rods, self._index, self.time

    def _restore(self, state) -> None:
        self._layout, self._instances, self._rods, self._index, self.time = state

    def step(self, dt: float) -> None:
        """
        Advance the model by ``dt``.

        Observers are notified before the instances advance, so control
        inputs apply to this step.

        Raises:
            InvalidTimeStep: if dt is not positive (nothing changes)
        """
        if not dt > 0:
            raise InvalidTimeStep(f"dt is not positive: {dt}")
        self._require_built()
        for observer in list(self._observers):
            observer.on_step(self, dt)
        for instance in self._instances:
            instance.step(dt)
        self.time += dt

    def teardown(self) -> None:
        for observer in list(self._observers):
            observer.on_teardown(self)
        self._restore((None, (), (), None, 0.0))

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def _require_built(self) -> None:
        if self._index is None:
            raise SpineNotBuiltError("SpineModel.setup() has not been run")

    @property
    def is_built(self) -> bool:
        return self._index is not None

    @property
    def layout(self) -> SpineLayout:
        self._require_built()
        return self._layout

    @property
    def graph(self) -> StructureGraph:
        return self.layout.graph

    @property
    def instances(self) -> Tuple[object, ...]:
        self._require_built()
        return self._instances

    @property
    def rods(self) -> Tuple[Rod, ...]:
        self._require_built()
        return self._rods

    @property
    def cables(self) -> Tuple[SpringCable, ...]:
        return self.get_all_instances()

    def get_instances(self, key: str) -> Tuple[SpringCable, ...]:
        """
        Cables registered under ``key``.

        Raises:
            KeyNotFound: if the key is not in the index
        """
        self._require_built()
        return self._index.get_instances(key)

    def get_all_instances(self) -> Tuple[SpringCable, ...]:
        """Every cable, in realization order."""
        self._require_built()
        return self._index.get_all_instances()
