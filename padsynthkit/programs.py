"""Bank and program tree for organising presets by MIDI bank and program."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Optional, Union

MAX_BANK_ID = 16383
MAX_PROGRAM_ID = 127


def _simplified(text: str) -> str:
    """Trim the text and collapse inner runs of whitespace to single spaces."""
    return " ".join(text.split())


def _parse_id(text: str) -> int:
    """Read the number before any '=' sign; unparsable text reads as zero."""
    head = text.split("=", 1)[0].strip()
    try:
        return int(head)
    except ValueError:
        return 0


@dataclass
class ProgramItem:
    """A program number within a bank and the preset name it selects."""

    id: int
    name: str

    @property
    def label(self) -> str:
        return f"{self.id} ="


@dataclass
class BankItem:
    """A bank number, its name and its programs, kept in id order."""

    id: int
    name: str
    programs: list[ProgramItem] = field(default_factory=list)
    expanded: bool = False

    @property
    def label(self) -> str:
        return str(self.id)


Item = Union[BankItem, ProgramItem]


class ProgramTree:
    """Editable tree of banks holding programs, each level sorted by id."""

    def __init__(self, presets: Sequence[str] = ()) -> None:
        self.banks: list[BankItem] = []
        self.current: Optional[Item] = None
        self.presets: list[str] = list(presets)

    def _bank_of(self, program: ProgramItem) -> Optional[BankItem]:
        for bank in self.banks:
            if any(p is program for p in bank.programs):
                return bank
        return None

    @staticmethod
    def _index_of(items: Sequence[Item], item: Item) -> int:
        return next(i for i, candidate in enumerate(items) if candidate is item)

    def load(
        self,
        banks: Iterable[BankItem],
        current: Optional[tuple[int, int]] = None,
    ) -> None:
        """Replace the tree with copies of banks; current is (bank id, program id)."""
        self.banks = []
        self.current = None
        for bank in sorted(banks, key=lambda b: b.id):
            bank_item = BankItem(bank.id, bank.name, expanded=True)
            for program in sorted(bank.programs, key=lambda p: p.id):
                program_item = ProgramItem(program.id, program.name)
                bank_item.programs.append(program_item)
                if current == (bank.id, program.id):
                    self.current = program_item
            self.banks.append(bank_item)

    def save(self) -> list[BankItem]:
        """The banks and programs in tree order, with names whitespace-simplified."""
        return [
            BankItem(
                bank.id,
                _simplified(bank.name),
                [ProgramItem(p.id, _simplified(p.name)) for p in bank.programs],
            )
            for bank in self.banks
        ]

    def current_program_name(self) -> str:
        """Name of the selected program, or '' when no program is selected."""
        if isinstance(self.current, ProgramItem):
            return _simplified(self.current.name)
        return ""

    def add_bank_item(self) -> Optional[BankItem]:
        """Create a new bank and make it current."""
        bank = self.new_bank_item()
        if bank is not None:
            self.current = bank
        return bank

    def add_program_item(self) -> Optional[ProgramItem]:
        """Create a new program and make it current."""
        program = self.new_program_item()
        if program is not None:
            self.current = program
        return program

    def new_bank_item(self) -> Optional[BankItem]:
        """Insert a bank with the first free id after the current bank."""
        item = self.current
        bank: Optional[BankItem]
        if isinstance(item, ProgramItem):
            bank = self._bank_of(item)
        else:
            bank = item

        index = 0
        bank_id = 0
        if bank is not None:
            bank_id = bank.id + 1
            if bank_id > MAX_BANK_ID:
                bank_id = 0
            else:
                index = self._index_of(self.banks, bank) + 1

        while index < len(self.banks):
            if bank_id < self.banks[index].id:
                break
            bank_id += 1
            if bank_id > MAX_BANK_ID:
                return None
            index += 1

        new_bank = BankItem(bank_id, f"Bank {bank_id}")
        self.banks.insert(index, new_bank)
        return new_bank

    def new_program_item(self) -> Optional[ProgramItem]:
        """Insert a program with the first free id after the current program."""
        item = self.current
        bank: Optional[BankItem]
        program: Optional[ProgramItem] = None
        if isinstance(item, ProgramItem):
            bank = self._bank_of(item)
            program = item
        else:
            bank = item
        if bank is None and self.banks:
            bank = self.banks[0]
        if bank is None:
            bank = self.new_bank_item()
        if bank is None:
            return None

        index = 0
        program_id = 0
        if program is not None:
            program_id = program.id + 1
            if program_id > MAX_PROGRAM_ID:
                program_id = 0
            else:
                index = self._index_of(bank.programs, program) + 1

        while index < len(bank.programs):
            if program_id < bank.programs[index].id:
                break
            program_id += 1
            if program_id > MAX_PROGRAM_ID:
                return None
            index += 1

        if program_id < len(self.presets):
            name = self.presets[program_id]
        else:
            name = f"Program {bank.id}.{program_id}"

        new_program = ProgramItem(program_id, name)
        bank.programs.insert(index, new_program)
        bank.expanded = True
        return new_program

    def change_item_id(self, item: Item, text: str) -> None:
        """Apply an edited id, moving the item to keep its level sorted.

        An id already taken by a sibling is refused and the old id kept.
        """
        new_id = _parse_id(text)
        if new_id == item.id:
            return
        limit = MAX_PROGRAM_ID if isinstance(item, ProgramItem) else MAX_BANK_ID
        if not 0 <= new_id <= limit:
            raise ValueError(f"id out of range 0..{limit}: {new_id}")

        if isinstance(item, ProgramItem):
            bank = self._bank_of(item)
            if bank is None:
                raise ValueError("program does not belong to this tree")
            siblings: list = bank.programs
        else:
            if not any(b is item for b in self.banks):
                raise ValueError("bank does not belong to this tree")
            siblings = self.banks

        old_index = self._index_of(siblings, item)
        del siblings[old_index]
        index = 0
        sibling_id = 0
        while index < len(siblings):
            sibling_id = siblings[index].id
            if sibling_id >= new_id:
                break
            index += 1
        if sibling_id == new_id:
            index = old_index
        else:
            item.id = new_id
        siblings.insert(index, item)
        self.current = item