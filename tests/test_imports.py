def test_import_knotweave_package() -> None:
    import importlib

    module = importlib.import_module("knotweave")
    assert module is not None


def test_import_engine_no_side_effects() -> None:
    from knotweave.services import DialogueEngine

    engine = DialogueEngine({"start": ["hi"]})
    assert engine.current_knot == "start"
    assert engine.diagnostics == []
