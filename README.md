# padsynthkit

Building blocks for a PADsynth-style synthesizer. None of them depend on a
GUI toolkit. Each module holds the state and rules of one part of the
instrument, so a front end only has to draw that state and pass user input
along. The package uses only the standard library.

## Modules

- `padsynthkit.reverb`: a stereo Freeverb-style reverb.
  - `Reverb` owns ten `CombFilter` and six `AllpassFilter` delay lines per
    channel. The line lengths are scaled to the sample rate.
  - `Reverb.process(left, right, wet, feedb, room, damp, width)` adds the
    wet signal to two equal-length sample lists, in place.
  - Channels of different length raise `ValueError`.
  - A `wet` below `1e-9` leaves the samples untouched.
  - `denormal` flushes values that would be single-precision subnormals to zero.
- `padsynthkit.dial`:
  - `Dial` is an integer knob driven by `press`, `move` and `release`. Its
    class-wide `Dial.mode` is a `DialMode`: `DEFAULT`, `LINEAR` or `ANGULAR`.
  - `Edit` is a numeric spin edit. With `Edit.mode` set to
    `EditMode.DEFERRED` it reports changes only when editing finishes.
- `padsynthkit.colors`:
  - `Color` is an RGBA color. It parses `#rgb`, `#rrggbb`, `#aarrggbb` and a
    few basic names, and has `lighter` and `darker`.
  - `Palette` holds a color for every `ColorRole` in every `ColorGroup`, and
    a mask of the roles that were set explicitly.
  - `Palette.from_button_color` generates a whole palette from one button color.
- `padsynthkit.palette_store`:
  - `Settings` is a slash-keyed store that reads and writes INI files.
  - Functions to keep named color themes in it: `save_named_palette`,
    `load_named_palette`, `named_palette`, `named_palette_list`,
    `named_palette_conf`, `add_named_palette_conf`,
    `delete_named_palette_conf`, `load_named_palette_conf` and
    `save_named_palette_conf`.
  - `named_palette` also regenerates the shades and the disabled group of
    dark themes, unless `fixup` is set.
- `padsynthkit.palette_model`: `PaletteModel` is a four-column table.
  - Each row is a color role, and column 0 is the role itself.
  - Columns 1–3 are its active, inactive and disabled colors.
  - Editing one color can derive related ones.
- `padsynthkit.palette_editor`: `PaletteEditor` handles named themes against
  a `Settings` store:
  - `save`, `delete`, `import_file`, `export_file`, `generate` and `reset`.
  - Dirty tracking through `is_dirty` and `dirty_count`.
  - The enabled state of its actions as `DialogButtons`.
  - Importing a file that holds no themes raises `PaletteImportError`.
- `padsynthkit.param`: parameter controls with a range, a remembered default
  and a display scale: `Param`, `Knob`, `Spin`, `Combo`, `Radio`, `Check`
  and `Group`.
  - The first value set becomes the default.
  - `middle_click` restores the default.
- `padsynthkit.programs`: `ProgramTree` edits MIDI banks (ids 0–16383) that
  hold programs (ids 0–127).
  - New items take the first free id.
  - `change_item_id` moves an item to keep its level sorted, and keeps the
    old id if the new one is already taken.
  - An id out of range raises `ValueError`.
- `padsynthkit.sample_view`: `SampleView` edits the partial magnitudes of a
  sample.
  - It builds a waveform outline and one draggable node per partial.
  - Dragging goes through `press`, `move` and `release`.
  - Preset shapes: `reset_normal`, `reset_square` and their odd/even
    variants, `reset_sinc` and `reset_default`.
  - `randomize` perturbs the magnitudes with Gaussian noise.
  - The sample is any object with `size`, `nh`, `value(phase)`,
    `harmonic(n)`, `set_harmonic(n, value)` and `reset_nh()`.

## Examples

```python
from padsynthkit.reverb import Reverb

reverb = Reverb(48000.0)
left = [1.0] + [0.0] * 4095
right = [0.0] * 4096
reverb.process(left, right, wet=0.5, feedb=0.5, room=0.8, damp=0.3, width=1.0)
```

```python
from padsynthkit.colors import Color, Palette
from padsynthkit.palette_store import Settings, save_named_palette, named_palette_list

settings = Settings("themes.conf")
save_named_palette(settings, "Dusk", Palette.from_button_color(Color.from_name("#404060")))
settings.sync()
print(named_palette_list(settings))  # ['Dusk']
```

```python
from padsynthkit.programs import ProgramTree

tree = ProgramTree(presets=["Init", "Pad"])
tree.add_bank_item()     # BankItem(id=0, name='Bank 0', ...)
tree.add_program_item()  # ProgramItem(id=0, name='Init')
banks = tree.save()
```

## What it does not do

The package is a set of models and nothing more:
- It draws nothing and opens no windows or dialogs.
- It has no command-line program.
- It does not synthesize sound or generate the harmonic samples that
  `SampleView` edits; you supply those.
- It does not talk to audio or MIDI devices.
- It keeps its settings only in the INI files that `Settings` reads and writes.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```