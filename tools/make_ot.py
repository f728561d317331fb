"""Generate demo .ot settings files with evenly spaced slices."""
import sys
from pathlib import Path

from ot_core.protocol import MAX_SLICES, TEMPO_SCALE
from ot_core.writer import write

# --- CONFIGURATION ---
SAMPLE_RATE = 44100
BPM = 120
BARS = 2
SAMPLES_PER_BEAT = SAMPLE_RATE * 60 // BPM


def generate_ot(output_dir, slices=8, name="demo", anomaly=False):
    """Write <output_dir>/<name>.ot chopping BARS bars into `slices` pieces.

    With `anomaly`, the declared slice count is pushed past the array
    capacity so the clamp path can be exercised.
    """
    total = SAMPLES_PER_BEAT * 4 * BARS
    step = total // max(slices, 1)
    table = [(i * step, (i + 1) * step, 0) for i in range(slices)]

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = write(
        out / f"{name}.ot",
        slices=table,
        slice_count=MAX_SLICES + 6 if anomaly else len(table),
        tempo=BPM * TEMPO_SCALE,
        trim_length=BARS * 4 * 100,
        loop_length=BARS * 4 * 100,
        trim_end=total,
    )
    print(f"GENERATED: {path}")
    return path


if __name__ == "__main__":
    # Usage:
    #   python tools/make_ot.py OUT_DIR [--slices N] [--name NAME] [--anomaly]

    args = [a for a in sys.argv[1:] if a]

    def pop_flag(arg_list: list[str], flag: str) -> tuple[bool, list[str]]:
        """Remove a boolean flag from an argv-style list."""
        if flag in arg_list:
            return True, [a for a in arg_list if a != flag]
        return False, arg_list

    def pop_value(arg_list: list[str], flag: str, default):
        if flag not in arg_list:
            return default, arg_list
        i = arg_list.index(flag)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{flag} requires a value")
        return arg_list[i + 1], arg_list[:i] + arg_list[i + 2:]

    anomaly, args = pop_flag(args, "--anomaly")
    slices, args = pop_value(args, "--slices", "8")
    name, args = pop_value(args, "--name", "demo")

    slices = int(slices)
    if not 0 <= slices <= MAX_SLICES:
        raise SystemExit(f"--slices must be between 0 and {MAX_SLICES}")

    out = args[0] if args else "demo_ot"
    generate_ot(out, slices=slices, name=name, anomaly=anomaly)
