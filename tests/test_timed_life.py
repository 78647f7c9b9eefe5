from thrivesim.timed_life import TimedLifeComponent, run_timed_life


def test_components_age_and_expire():
    components = {
        1: TimedLifeComponent(1.0),
        2: TimedLifeComponent(0.25),
        3: TimedLifeComponent(0.5),
    }
    destroyed = []
    expired = run_timed_life(components, 0.5, destroyed.append)
    assert destroyed == [2, 3]
    assert expired == destroyed
    assert components[1].time_to_live == 0.5


def test_nothing_expires_with_time_left():
    components = {"a": TimedLifeComponent(2.0)}
    destroyed = []
    assert run_timed_life(components, 1.0, destroyed.append) == []
    assert destroyed == []
    assert components["a"].time_to_live == 1.0


def test_expired_components_keep_being_reported():
    components = {7: TimedLifeComponent(0.5)}
    destroyed = []
    run_timed_life(components, 1.0, destroyed.append)
    run_timed_life(components, 1.0, destroyed.append)
    assert destroyed == [7, 7]
    assert components[7].time_to_live < 0


def test_default_component_expires_immediately():
    destroyed = []
    run_timed_life({5: TimedLifeComponent()}, 0.0, destroyed.append)
    assert destroyed == [5]