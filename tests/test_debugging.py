import logging

import pytest

from larexamples.debugging import Disturbance, Exploder, LogicError


def test_exploder_default_catches_everything(caplog):
    caplog.set_level(logging.INFO, logger="Exploder")
    Exploder().analyze()
    messages = [record.getMessage() for record in caplog.records]
    assert "Starting TOOR iteration #5" in messages
    assert "Starting TOOR iteration #6" not in messages
    assert "TOOR iterations completed." not in messages
    assert any(m.startswith("Now allocating: ") for m in messages)


def test_exploder_unmanaged_bad_alloc():
    with pytest.raises(MemoryError):
        Exploder(manage_bad_alloc=False).analyze()


def test_exploder_unmanaged_out_of_range():
    with pytest.raises(IndexError):
        Exploder(manage_out_of_range=False).analyze()


def test_exploder_unmanaged_logic_error():
    with pytest.raises(LogicError, match="I hate the world and I am vengeful."):
        Exploder(manage_art_exception=False).analyze()


def test_exploder_bad_alloc_comes_first():
    exploder = Exploder(
        manage_bad_alloc=False, manage_out_of_range=False, manage_art_exception=False
    )
    with pytest.raises(MemoryError):
        exploder.analyze()


@pytest.mark.parametrize("count", [0, 1, 7])
def test_disturbance_catches_all(count):
    assert Disturbance(count).produce() == count


def test_disturbance_rejects_negative():
    with pytest.raises(ValueError):
        Disturbance(-1)