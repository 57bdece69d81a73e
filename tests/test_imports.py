def test_import_idlerpg_package() -> None:
    import importlib

    module = importlib.import_module("idlerpg")
    assert module.__version__


def test_import_services_no_side_effects() -> None:
    from idlerpg.services import simulate_combat_tick
    from idlerpg.services.factories import generate_equipment

    assert callable(simulate_combat_tick)
    assert callable(generate_equipment)
