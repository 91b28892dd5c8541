from knotweave.data.repositories import StoryRepository
from knotweave.services import ChoiceEvent, DialogueEngine, EndEvent, TextEvent


def _play(choices):
    engine = DialogueEngine(StoryRepository().story(), "start")
    transcript = []
    pending = list(choices)
    event = engine.advance()
    while not isinstance(event, EndEvent):
        if isinstance(event, TextEvent):
            transcript.append(event.body)
            event = engine.advance()
        else:
            assert isinstance(event, ChoiceEvent)
            event = engine.commit_choice(pending.pop(0))
    assert not pending
    return engine, transcript


def test_escape_route_reaches_final_end() -> None:
    engine, transcript = _play([3, 1, 1, 2])

    assert "You've escaped the mysterious room!" in transcript
    assert transcript[-1] == "This story engine supports many more features and can be extended further."
    assert engine.get_variable("has_key") is True
    assert engine.current_knot == "final_end"
    assert engine.has_ended()


def test_learned_symbols_unlocks_conditional_line() -> None:
    _, with_symbols = _play([1, 1, 1, 1, 2, 2])
    _, without_symbols = _play([2, 1, 1, 2, 2])

    warning = "You remember the warning, but curiosity gets the better of you."
    assert warning in with_symbols
    assert warning not in without_symbols


def test_replaying_revisits_start() -> None:
    engine, _ = _play([3, 2, 1, 3, 2, 2])

    assert engine.visit_count("start") == 2
    assert engine.visit_count("ending_trapped") == 2
    assert len(engine.history.choices_made) == 6
