from pathlib import Path

import pytest

from obxf.fxformat import is_patch, pack_bank_chunk, pack_patch_chunk
from obxf.library import DEFAULT_BANK, DEFAULT_SKIN, PresetLibrary


def test_folders_are_below_document_folder(tmp_path):
    lib = PresetLibrary(tmp_path)
    assert lib.midi_folder() == tmp_path / "MIDI"
    assert lib.skin_folder() == tmp_path / "Themes"
    assert lib.banks_folder() == tmp_path / "Banks"
    assert lib.presets_folder() == tmp_path / "Patches"


def test_defaults_without_config(tmp_path):
    lib = PresetLibrary(tmp_path)
    assert lib.gui_size == 1
    assert lib.current_skin == DEFAULT_SKIN == "Ilkka Rosma Dark"
    assert lib.current_bank == DEFAULT_BANK
    assert lib.current_skin_folder() == tmp_path / "Themes" / "Ilkka Rosma Dark"


def test_settings_round_trip(tmp_path):
    lib = PresetLibrary(tmp_path)
    lib.set_gui_size(2)
    lib.set_current_skin_folder("Other")
    assert lib.save_config() is True
    assert lib.save_config() is False

    again = PresetLibrary(tmp_path)
    assert again.gui_size == 2
    assert again.current_skin == "Other"


def test_context_manager_saves_settings(tmp_path):
    with PresetLibrary(tmp_path) as lib:
        lib.set_gui_size(3)
    assert PresetLibrary(tmp_path).gui_size == 3


def test_scan_skins_lists_sorted_directories(tmp_path):
    themes = tmp_path / "Themes"
    (themes / "b").mkdir(parents=True)
    (themes / "a").mkdir()
    (themes / "file.txt").write_text("x")
    lib = PresetLibrary(tmp_path)
    assert lib.skin_files == [themes / "a", themes / "b"]


def test_scan_banks_and_first_bank_loaded(tmp_path):
    banks = tmp_path / "Banks"
    banks.mkdir()
    (banks / "b.fxb").write_bytes(b"bbb")
    (banks / "a.fxb").write_bytes(b"aaa")
    (banks / "c.txt").write_bytes(b"ccc")
    loaded = []
    lib = PresetLibrary(tmp_path, load_state=lambda d: loaded.append(d) or True)
    assert lib.bank_files == [banks / "a.fxb", banks / "b.fxb"]
    assert loaded == [b"aaa"]
    assert lib.current_bank == "a.fxb"
    assert lib.current_bank_file() == banks / "a.fxb"


def test_load_bank_rejected_keeps_state(tmp_path):
    lib = PresetLibrary(tmp_path, load_state=lambda d: False)
    bank = tmp_path / "x.fxb"
    bank.write_bytes(b"data")
    assert lib.load_bank(bank) is False
    assert lib.current_bank == DEFAULT_BANK
    assert lib.current_bank_path is None


def test_load_missing_bank_fails(tmp_path):
    lib = PresetLibrary(tmp_path)
    assert lib.load_bank(tmp_path / "missing.fxb") is False


def test_load_bank_notifies_host(tmp_path):
    calls = []
    lib = PresetLibrary(tmp_path, host_update=lambda: calls.append(1))
    bank = tmp_path / "x.fxb"
    bank.write_bytes(b"data")
    assert lib.load_bank(bank) is True
    assert calls == [1]


def test_save_bank_writes_chunk(tmp_path):
    state = b"\x01\x02\x03\x04\x05"
    lib = PresetLibrary(tmp_path, get_state=lambda: state, num_programs=lambda: 128)
    target = tmp_path / "saved.fxb"
    assert lib.save_bank(target) is True
    assert target.read_bytes() == pack_bank_chunk(state, 128)
    assert lib.current_bank_path == target
    assert target.read_bytes()[:4] == b"CcnK"


def test_save_bank_without_current_file_raises(tmp_path):
    lib = PresetLibrary(tmp_path, get_state=lambda: b"x")
    with pytest.raises(ValueError):
        lib.save_bank()


def test_delete_bank_loads_next(tmp_path):
    banks = tmp_path / "Banks"
    banks.mkdir()
    (banks / "a.fxb").write_bytes(b"a")
    (banks / "b.fxb").write_bytes(b"b")
    lib = PresetLibrary(tmp_path)
    assert lib.delete_bank() is True
    assert not (banks / "a.fxb").exists()
    assert lib.current_bank == "b.fxb"


def test_delete_bank_without_current_fails(tmp_path):
    assert PresetLibrary(tmp_path).delete_bank() is False


def test_patch_round_trip(tmp_path):
    received = []
    lib = PresetLibrary(
        tmp_path,
        get_program_state=lambda: b"state",
        num_programs=lambda: 128,
        program_name=lambda: "Lead",
        load_state=lambda d: received.append(d) or True,
    )
    path = tmp_path / "lead.fxp"
    assert lib.save_patch(path) is True
    data = path.read_bytes()
    assert data == pack_patch_chunk(b"state", 128, "Lead")
    assert is_patch(data)
    assert lib.current_patch == "lead.fxp"

    assert lib.load_patch_file(path) is True
    assert received == [data]


def test_serialize_patch_without_state_is_empty(tmp_path):
    assert PresetLibrary(tmp_path).serialize_patch() == b""


def test_load_patch_sets_name_even_if_missing(tmp_path):
    lib = PresetLibrary(tmp_path)
    path = tmp_path / "none.fxp"
    assert lib.load_patch(path) is True
    assert lib.current_patch == "none.fxp"
    assert lib.current_patch_path == path


def _program_hooks(names, log):
    return dict(
        num_programs=lambda: len(names),
        is_program_name=lambda i, n: names[i] == n,
        set_current_program=lambda i: log.append(("select", i)),
        set_patch_name=lambda n: log.append(("name", n)),
    )


def test_new_patch_selects_existing(tmp_path):
    log = []
    lib = PresetLibrary(tmp_path, **_program_hooks(["a", "b", "c"], log))
    lib.new_patch("c")
    assert log == [("select", 2)]


def test_new_patch_renames_first(tmp_path):
    log = []
    lib = PresetLibrary(tmp_path, **_program_hooks(["a", "b"], log))
    lib.new_patch("z")
    assert log == [("select", 0), ("name", "z")]


def test_initialize_patch_order(tmp_path):
    log = []
    lib = PresetLibrary(
        tmp_path,
        reset_patch_to_default=lambda: log.append("reset"),
        set_patch_name=lambda n: log.append(n),
        send_change_message=lambda: log.append("changed"),
    )
    lib.initialize_patch()
    assert log == ["reset", "Default", "changed"]


def test_change_patch_name(tmp_path):
    names = []
    lib = PresetLibrary(tmp_path, set_patch_name=names.append)
    lib.change_patch_name("Pad")
    assert names == ["Pad"]