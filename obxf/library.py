"""Preset library: folders, skins, banks, patches and the saved GUI settings."""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable

from obxf.fxformat import pack_bank_chunk, pack_patch_chunk

DEFAULT_SKIN = "Ilkka Rosma Dark"
DEFAULT_BANK = "rfawcett160 bank"
DEFAULT_GUI_SIZE = 1
CONFIG_FILE_NAME = "Skin.xml"
PATCH_NAME_SIZE = 28


def default_document_folder() -> Path:
    """Return the per-user folder holding banks, patches, themes and MIDI maps."""
    return Path.home() / "Documents" / "Surge Synth Team" / "OB-Xf"


def _parse_int(text: str | None, default: int) -> int:
    if text is None:
        return default
    digits = ""
    for i, char in enumerate(text.strip()):
        if char.isdigit() or (i == 0 and char in "+-"):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return 0


class PresetLibrary:
    """Finds and stores banks, patches and skins, and keeps the GUI settings."""

    def __init__(
        self,
        document_folder: str | os.PathLike[str] | None = None,
        *,
        load_state: Callable[[bytes], bool] | None = None,
        get_state: Callable[[], bytes] | None = None,
        get_program_state: Callable[[], bytes] | None = None,
        num_programs: Callable[[], int] | None = None,
        program_name: Callable[[], str] | None = None,
        set_patch_name: Callable[[str], None] | None = None,
        reset_patch_to_default: Callable[[], None] | None = None,
        send_change_message: Callable[[], None] | None = None,
        set_current_program: Callable[[int], None] | None = None,
        is_program_name: Callable[[int, str], bool] | None = None,
        host_update: Callable[[], None] | None = None,
    ) -> None:
        folder = Path(document_folder) if document_folder is not None else default_document_folder()
        if folder.is_symlink():
            folder = folder.resolve()
        self.document_folder = folder

        self.load_state = load_state
        self.get_state = get_state
        self.get_program_state = get_program_state
        self.num_programs = num_programs
        self.program_name = program_name
        self.set_patch_name = set_patch_name
        self.reset_patch_to_default = reset_patch_to_default
        self.send_change_message = send_change_message
        self.set_current_program = set_current_program
        self.is_program_name = is_program_name
        self.host_update = host_update

        self.config_path = self.document_folder / CONFIG_FILE_NAME
        self._config: dict[str, str] = self._read_config()
        self._config_dirty = False

        self.gui_size = _parse_int(self._config.get("gui_size"), DEFAULT_GUI_SIZE)
        self.current_skin = self._config.get("skin", DEFAULT_SKIN)
        self.pixel_scale_factor = 0.0

        self.current_bank = DEFAULT_BANK
        self.current_bank_path: Path | None = None
        self.current_patch = ""
        self.current_patch_path: Path | None = None

        self.skin_files: list[Path] = []
        self.bank_files: list[Path] = []
        self.scan_banks()
        self.scan_skins()
        if self.bank_files:
            self.load_bank(self.bank_files[0])

    def __enter__(self) -> PresetLibrary:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.save_config()

    # Configuration

    def _read_config(self) -> dict[str, str]:
        try:
            root = ET.parse(self.config_path).getroot()
        except (OSError, ET.ParseError):
            return {}
        return {
            element.get("name", ""): element.get("val", "")
            for element in root.iter("VALUE")
            if element.get("name")
        }

    def _set_config_value(self, key: str, value: object) -> None:
        self._config[key] = str(value)
        self._config_dirty = True

    def save_config(self) -> bool:
        """Write the settings file if anything changed; return True if it was written."""
        if not self._config_dirty:
            return False
        root = ET.Element("PROPERTIES")
        for key, value in self._config.items():
            ET.SubElement(root, "VALUE", name=key, val=value)
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        ET.ElementTree(root).write(self.config_path, encoding="UTF-8", xml_declaration=True)
        self._config_dirty = False
        return True

    # Folders

    def midi_folder(self) -> Path:
        """Return the folder of MIDI mapping files."""
        return self.document_folder / "MIDI"

    def skin_folder(self) -> Path:
        """Return the folder holding one sub-folder per skin."""
        return self.document_folder / "Themes"

    def banks_folder(self) -> Path:
        """Return the folder of bank files."""
        return self.document_folder / "Banks"

    def presets_folder(self) -> Path:
        """Return the folder of patch files."""
        return self.document_folder / "Patches"

    def current_skin_folder(self) -> Path:
        """Return the folder of the selected skin."""
        return self.skin_folder() / self.current_skin

    def current_bank_file(self) -> Path:
        """Return the path of the current bank inside the banks folder."""
        return self.banks_folder() / self.current_bank

    # Skins and settings

    def set_current_skin_folder(self, folder_name: str) -> None:
        """Select the skin named ``folder_name`` and remember it in the settings."""
        self.current_skin = folder_name
        self._set_config_value("skin", folder_name)

    def scan_skins(self) -> list[Path]:
        """Refresh and return the sorted list of skin folders."""
        folder = self.skin_folder()
        self.skin_files = (
            sorted(entry for entry in folder.iterdir() if entry.is_dir())
            if folder.is_dir()
            else []
        )
        return self.skin_files

    def set_gui_size(self, size: int) -> None:
        """Set the GUI size and remember it in the settings."""
        self.gui_size = size
        self._set_config_value("gui_size", size)

    # Banks

    def scan_banks(self) -> list[Path]:
        """Refresh and return the sorted list of '.fxb' files in the banks folder."""
        folder = self.banks_folder()
        self.bank_files = (
            sorted(entry for entry in folder.glob("*.fxb") if entry.is_file())
            if folder.is_dir()
            else []
        )
        return self.bank_files

    def _load_file(self, path: Path) -> bool:
        try:
            data = path.read_bytes()
        except OSError:
            return False
        if self.load_state is not None and not self.load_state(data):
            return False
        return True

    def load_bank(self, path: str | os.PathLike[str]) -> bool:
        """Load a bank file; return False if it cannot be read or is rejected."""
        path = Path(path)
        if not self._load_file(path):
            return False
        self.current_bank = path.name
        self.current_bank_path = path
        if self.host_update is not None:
            self.host_update()
        return True

    def delete_bank(self) -> bool:
        """Delete the current bank file and load the first remaining bank."""
        if self.current_bank_path is None:
            return False
        try:
            self.current_bank_path.unlink()
        except OSError:
            return False
        self.scan_banks()
        if self.bank_files:
            return self.load_bank(self.bank_files[0])
        return True

    def save_bank_file(self, path: str | os.PathLike[str]) -> bool:
        """Write the whole bank state to ``path`` as an 'FBCh' chunk file."""
        if self.get_state is not None:
            count = self.num_programs() if self.num_programs is not None else 0
            Path(path).write_bytes(pack_bank_chunk(self.get_state(), count))
        return True

    def save_bank(self, path: str | os.PathLike[str] | None = None) -> bool:
        """Save the bank to ``path``, or to the current bank file when none is given."""
        if path is None:
            if self.current_bank_path is None:
                raise ValueError("there is no current bank file to save to")
            return self.save_bank_file(self.current_bank_path)
        path = Path(path)
        self.save_bank_file(path)
        self.current_bank_path = path
        return True

    # Patches

    def load_patch_file(self, path: str | os.PathLike[str]) -> bool:
        """Load a patch file; return False if it cannot be read or is rejected."""
        path = Path(path)
        if not self._load_file(path):
            return False
        self.current_patch = path.name
        self.current_patch_path = path
        if self.host_update is not None:
            self.host_update()
        return True

    def load_patch(self, path: str | os.PathLike[str]) -> bool:
        """Load a patch file and make it the current patch whatever the outcome."""
        path = Path(path)
        self.load_patch_file(path)
        self.current_patch = path.name
        self.current_patch_path = path
        return True

    def serialize_patch(self) -> bytes:
        """Return the current program as an 'FPCh' chunk, or b'' without program state."""
        if self.get_program_state is None:
            return b""
        count = self.num_programs() if self.num_programs is not None else 0
        name = self.program_name() if self.program_name is not None else ""
        return pack_patch_chunk(self.get_program_state(), count, name)

    def save_patch_file(self, path: str | os.PathLike[str]) -> bool:
        """Write the current program to ``path`` as an 'FPCh' chunk file."""
        if self.get_program_state is not None:
            Path(path).write_bytes(self.serialize_patch())
        return True

    def save_patch(self, path: str | os.PathLike[str] | None = None) -> bool:
        """Save the patch to ``path``, or to the current patch file when none is given."""
        if path is None:
            if self.current_patch_path is None:
                raise ValueError("there is no current patch file to save to")
            path = self.current_patch_path
        path = Path(path)
        success = self.save_patch_file(path)
        if success:
            self.current_patch = path.name
            self.current_patch_path = path
        return success

    def change_patch_name(self, name: str) -> None:
        """Rename the current program."""
        if self.set_patch_name is not None:
            self.set_patch_name(name)

    def new_patch(self, name: str) -> None:
        """Select the program called ``name``, or rename program 0 to it."""
        if (
            self.num_programs is None
            or self.is_program_name is None
            or self.set_current_program is None
            or self.set_patch_name is None
        ):
            return
        for index in range(self.num_programs()):
            if self.is_program_name(index, name):
                self.set_current_program(index)
                return
        self.set_current_program(0)
        self.set_patch_name(name)

    def initialize_patch(self) -> None:
        """Reset the current program to defaults and name it 'Default'."""
        if self.reset_patch_to_default is not None:
            self.reset_patch_to_default()
        if self.set_patch_name is not None:
            self.set_patch_name("Default")
        if self.send_change_message is not None:
            self.send_change_message()