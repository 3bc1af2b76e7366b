import pytest
from lyrebird.core.system import System
from lyrebird.core.component import Component

class Counter(Component):
    value: int = 0

class CountingSystem(System):
    required_components = [Counter]

    def process_entity(self, entity, dt):
        entity.get(Counter).value += 1

def make_stage(name, priority, log):
    class Stage(System):
        def update(self, dt):
            log.append(name)

        def process_entity(self, entity, dt):
            pass

    Stage.priority = priority
    return Stage()

def test_system_processing(world):
    e1 = world.create_entity()
    e1.add(Counter())
    e2 = world.create_entity()

    world.add_system(CountingSystem())
    world.update(1.0)

    assert e1.get(Counter).value == 1
    assert e2.try_get(Counter) is None

def test_systems_run_by_descending_priority(world):
    log = []
    world.add_system(make_stage("late", 10, log))
    world.add_system(make_stage("early", 100, log))
    world.add_system(make_stage("middle", 50, log))

    world.update(0.1)

    assert log == ["early", "middle", "late"]

def test_system_add_remove(world):
    system = CountingSystem()

    world.add_system(system)
    assert system.world is world
    assert world.get_system(CountingSystem) is system

    world.remove_system(system)
    with pytest.raises(RuntimeError):
        _ = system.world
