import threading

import pytest

from alphabet import ALPHABET, SIZE
from config import DEFAULT_REFLECTOR_WIRING, DEFAULT_ROTOR_WIRINGS
from errors import (
    ConfigError,
    InvalidLetter,
    InvalidOffset,
    InvalidPermutation,
    InvalidReflector,
    InvalidRotorIndex,
)
from machine import FAST, MIDDLE, SLOW, Machine


# ── stepping ─────────────────────────────────────────────────────


def test_fast_rotor_steps_before_encoding(machine):
    machine.step_and_encode("A")
    assert machine.offsets == (0, 0, 1)


def test_middle_carries_after_26_steps(machine):
    for _ in range(26):
        machine.step()
    assert machine.offsets == (0, 1, 0)


def test_slow_carries_after_676_steps(machine):
    for _ in range(26 * 26 - 1):
        machine.step()
    assert machine.offsets == (0, 25, 25)
    machine.step()
    assert machine.offsets == (1, 0, 0)


def test_full_cycle_returns_to_start(machine):
    seen = set()
    for _ in range(SIZE ** 3):
        machine.step()
        seen.add(machine.offsets)
    assert machine.offsets == (0, 0, 0)
    assert len(seen) == SIZE ** 3


def test_carry_uses_updated_offsets(machine):
    machine.set_window("AZZ")
    machine.step()
    assert machine.window == "BAA"

    machine.set_window("AAZ")
    machine.step()
    assert machine.window == "ABA"


def test_offsets_stay_in_range_across_wrap(machine):
    machine.set_window("ZZZ")
    machine.step()
    assert machine.offsets == (0, 0, 0)


# ── signal path ──────────────────────────────────────────────────


def test_known_first_keystroke(machine):
    # worked by hand through rotors III, II, I and the reflector
    assert machine.step_and_encode("A") == "Z"


def test_encode_is_fixed_point_free_involution(machine):
    for window in ("AAA", "QEV", "ZZZ", "MAZ"):
        machine.set_window(window)
        outputs = [machine.encode(i) for i in range(SIZE)]
        assert sorted(outputs) == list(range(SIZE))
        for i, out in enumerate(outputs):
            assert out != i
            assert machine.encode(out) == i
        assert machine.window == window


def test_encode_does_not_step(machine):
    machine.encode(5)
    assert machine.offsets == (0, 0, 0)


@pytest.mark.parametrize("bad", [-1, 26, "A", None, True])
def test_encode_rejects_bad_signal(machine, bad):
    with pytest.raises(InvalidLetter):
        machine.encode(bad)


def test_no_letter_ever_lights_itself(machine):
    for _ in range(3):
        for ch in ALPHABET:
            assert machine.step_and_encode(ch) != ch


def test_hello_round_trip(machine, twin):
    cipher = machine.encipher("HELLO")
    assert cipher != "HELLO"
    assert twin.encipher(cipher) == "HELLO"


def test_lowercase_is_normalised(machine, twin):
    assert machine.step_and_encode("a") == twin.step_and_encode("A")


def test_determinism(machine, twin):
    text = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG" * 30
    assert machine.encipher(text) == twin.encipher(text)
    assert machine.offsets == twin.offsets


def test_long_round_trip_crosses_slow_carry(machine, twin):
    text = (ALPHABET * 30)[:700]
    assert twin.encipher(machine.encipher(text)) == text
    assert machine.get_offset(SLOW) == 1


def test_reset_rewinds_to_initial_offsets():
    m = Machine(DEFAULT_ROTOR_WIRINGS, DEFAULT_REFLECTOR_WIRING, (3, 4, 5))
    cipher = m.encipher("ATTACKATDAWN")
    assert m.offsets != (3, 4, 5)
    m.reset()
    assert m.offsets == (3, 4, 5)
    assert m.encipher(cipher) == "ATTACKATDAWN"


# ── rejected input leaves state untouched ───────────────────────


@pytest.mark.parametrize("bad", ["1", " ", "", "AB", None])
def test_bad_letter_does_not_step(machine, bad):
    with pytest.raises(InvalidLetter):
        machine.step_and_encode(bad)
    assert machine.offsets == (0, 0, 0)


def test_encipher_checks_whole_text_first(machine):
    with pytest.raises(InvalidLetter):
        machine.encipher("HELLO WORLD")
    assert machine.offsets == (0, 0, 0)


# ── offsets ──────────────────────────────────────────────────────


def test_set_offset_does_not_step(machine):
    machine.set_offset(MIDDLE, 25)
    assert machine.get_offset(MIDDLE) == 25
    assert machine.offsets == (0, 25, 0)
    assert machine.window == "AZA"


@pytest.mark.parametrize("bad", [-1, 3, "0", None, True])
def test_rotor_index_validation(machine, bad):
    with pytest.raises(InvalidRotorIndex):
        machine.get_offset(bad)
    with pytest.raises(InvalidRotorIndex):
        machine.set_offset(bad, 0)


@pytest.mark.parametrize("bad", [-1, 26, "B", 1.5])
def test_offset_value_validation(machine, bad):
    with pytest.raises(InvalidOffset):
        machine.set_offset(FAST, bad)
    assert machine.get_offset(FAST) == 0


@pytest.mark.parametrize("bad", ["AB", "ABCD", "A1C", 123])
def test_set_window_validation(machine, bad):
    with pytest.raises(InvalidLetter):
        machine.set_window(bad)
    assert machine.offsets == (0, 0, 0)


# ── construction ─────────────────────────────────────────────────


def test_duplicate_wiring_fails_construction():
    wirings = list(DEFAULT_ROTOR_WIRINGS)
    wirings[1] = "AACDEFGHIJKLMNOPQRSTUVWXYZ"
    with pytest.raises(InvalidPermutation):
        Machine(wirings, DEFAULT_REFLECTOR_WIRING)


def test_self_mapping_reflector_fails_construction():
    wiring = "A" + DEFAULT_REFLECTOR_WIRING[1:8] + "I" + DEFAULT_REFLECTOR_WIRING[9:]
    with pytest.raises(InvalidReflector):
        Machine(DEFAULT_ROTOR_WIRINGS, wiring)


def test_rotor_count_is_fixed():
    with pytest.raises(ConfigError):
        Machine(DEFAULT_ROTOR_WIRINGS[:2], DEFAULT_REFLECTOR_WIRING)
    with pytest.raises(ConfigError):
        Machine(DEFAULT_ROTOR_WIRINGS, DEFAULT_REFLECTOR_WIRING, (0, 0))


def test_bad_initial_offset_fails_construction():
    with pytest.raises(InvalidOffset):
        Machine(DEFAULT_ROTOR_WIRINGS, DEFAULT_REFLECTOR_WIRING, (0, 0, 26))


# ── threads ──────────────────────────────────────────────────────


def test_concurrent_keystrokes_are_atomic(machine):
    def worker():
        for _ in range(200):
            machine.step_and_encode("A")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    # 800 keystrokes: 30 full fast cycles plus 20
    assert machine.offsets == (1, 4, 20)


def test_window_reads_never_see_half_finished_step(machine):
    done = threading.Event()
    seen = []

    def reader():
        while not done.is_set():
            slow, middle, fast = machine.offsets
            seen.append(slow * 676 + middle * 26 + fast)

    t = threading.Thread(target=reader)
    t.start()
    for _ in range(2000):
        machine.step()
    done.set()
    t.join()
    # a torn read (fast wrapped, middle not yet carried) would go backwards
    assert seen == sorted(seen)


# ── non-ASCII look-alikes ────────────────────────────────────────


@pytest.mark.parametrize("bad", ["ı", "ſ", "ß", "Ａ"])
def test_unicode_case_folds_are_rejected(machine, bad):
    with pytest.raises(InvalidLetter):
        machine.step_and_encode(bad)
    with pytest.raises(InvalidLetter):
        machine.encipher("HI" + bad)
    with pytest.raises(InvalidLetter):
        machine.set_window("A" + bad + "A")
    assert machine.offsets == (0, 0, 0)


# ── manual rotor clicks ──────────────────────────────────────────


def test_turn_clicks_one_rotor_without_carry(machine):
    machine.set_window("AZZ")
    assert machine.turn(FAST) == 0
    assert machine.window == "AZA"
    assert machine.turn(MIDDLE) == 0
    assert machine.window == "AAA"
    assert machine.turn(SLOW) == 1
    assert machine.window == "BAA"


def test_turn_rejects_bad_index(machine):
    with pytest.raises(InvalidRotorIndex):
        machine.turn(3)
