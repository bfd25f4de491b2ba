# obxf

Pure-Python building blocks of a polyphonic analog-modelling synthesizer.
The package has no runtime dependencies.

## What is inside

- `obxf.fxformat` – the chunk containers of FXB bank and FXP patch files:
  `pack_bank_chunk`, `pack_patch_chunk`, `is_patch`, and the helpers
  `fxb_name`, `fxb_swap`, `fxb_swap_float` and `compare_magic`.
- `obxf.mathutil` – `get_pitch` (semitones from A 440 to Hz), `linsc` and
  `logsc` (linear and exponential parameter scaling).
- `obxf.filters` – `OnePoleFilter`, a trapezoidal one-pole low-pass with
  `process`, `lowpass` and `lowpass_unwarped`.
- `obxf.decimator` – `Decimator9` and `Decimator17`, half-band decimators
  turning a pair of samples into one through `calc`.
- `obxf.noise` – `Noise`, producing white, pink and red noise from a linear
  congruential generator.
- `obxf.lfo` – `Lfo`, mixing triangle/sine, saw/square and glide/sample-and-hold
  waves, with tempo sync; and `fast_sin`, a rational sine approximation.
- `obxf.pulse` – `PulseOsc`, a pulse oscillator with BLEP edge correction and
  hard-sync support, and `SampleDelay`, a fixed sample delay.
- `obxf.tuning` – `Tuning` and `TuningMode`: equal temperament, or retuning
  from any object providing `has_master`, `retuning_in_semitones` and
  `scale_name`.
- `obxf.fifo` – `ParameterFifo`, a bounded, lock-protected queue of
  `ParameterChange` items.
- `obxf.bank` – `Program` and `Bank`, a fixed set of programs (128 by default)
  with a current selection.
- `obxf.library` – `PresetLibrary`, handling banks, patches, skins and a small
  XML settings file (`Skin.xml`) in a documents folder.
- `obxf.processor` – `ProgramHost`, tying a bank to a parameter sink, a
  parameter queue and change listeners; `make_library` returns a
  `PresetLibrary` wired to it.
- `obxf.constrainer`, `obxf.display`, `obxf.skins`, `obxf.namedialog` –
  toolkit-independent editor logic: `AspectRatioDownscaleConstrainer`,
  `format_preset_label` and `PresetBar`, `ScalableComponent` (skin image
  lookup), and `PresetNameDialog` with `DialogResult`.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

## Examples

```python
from obxf.noise import Noise

noise = Noise()
noise.set_sample_rate(44100.0, 10)
noise.seed_white_noise(1)
samples = [noise.pink_sample() for _ in range(64)]
```

```python
from obxf.fxformat import pack_patch_chunk, is_patch

data = pack_patch_chunk(b"state", 128, "Init")
assert is_patch(data)
```

```python
from obxf.bank import Bank

bank = Bank(param_count=8)
program = bank.select(5)
program.values[0] = 0.5
assert bank.current() is program
```

```python
from obxf.processor import ProgramHost

received = []
host = ProgramHost(4, engine=lambda index, value: received.append((index, value)))
host.set_parameter(2, 0.75)
host.set_current_program(3)
```

```python
from obxf.display import format_preset_label

format_preset_label(0, "Brass")   # "001: Brass"
```

## What it does not do

The package holds parts of a synthesizer, not a playable instrument. It has
no voice, envelope, filter-ladder or full oscillator-block engine that renders
notes, no MIDI input handling, no audio device or plugin host interface, and
no command to run. `ProgramHost` passes parameter values to whatever callable
is given as `engine`; `PresetLibrary` reads and writes files but leaves
loading and producing the state bytes to the callables it is given. The
editor modules hold state and logic only; nothing is drawn on screen.

## Running the tests

```
pytest
```