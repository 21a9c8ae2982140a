# tilefloor

A floorplanner for chips that hold fixed and soft modules. The chip area is kept as a
corner-stitched plane of tiles. The fixed modules are carved out of the plane first.
The soft modules are then placed into the free space that is left, so that the
weighted half-perimeter wirelength (HPWL) of the connections between modules stays low.

The `tilefloor` command runs these stages:

1. **Greedy placement.** Each soft module gets a rectangle of its area. The shapes
   tried have aspect ratios from 1 up to about 2. Each is grown from corner points of
   the free space and put where its weighted wire cost is lowest. The first run uses
   a fixed order: the large modules by left edge, then the rest by distance from the
   origin. Then the placement is repeated many times with randomised orders, in which
   strongly connected modules tend to follow each other. The best legal plane is kept.
2. **Replacement.** Each placed module is lifted out. It is put back at the cheapest
   spot where a rectangle of its minimum area fits, and its old spot wins ties. At most
   10 rounds run, and they stop early when the HPWL no longer changes.
3. **Transform.** A module made of one tile may slide into the free space next to one
   of its corners. Where that space is too narrow, it may shrink and grow a second
   tile into the space, which gives it an L-shaped outline. The cheapest move is taken
   only when it lowers the module's cost. Rounds repeat until the HPWL no longer
   changes.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

```
tilefloor [placement] [nodes] [modules] [options]
```

The positional arguments default to `out3.pl`, `circuit3.nodes` and
`case03-input.txt`. The files are read as whitespace-separated words:

- **placement**: three header words. Then, for each module, its name, x, y and two
  more words. The soft modules come first.
- **nodes**: three header words, then a word, the chip width and the chip height.
  Next come two words and the total module count, then two words and the fixed module
  count. Then, for each module, a name, its width and height. Fixed modules carry one
  extra word after their height.
- **modules**: five header words. Then a name and a minimum area for each soft
  module, then two words, then five words for each fixed module. After that come a
  word and the connection count, and then one `name name weight` line for each
  connection.

Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `--iterations N` | `50000` | number of randomised placement attempts |
| `--seed N` | current time | seed for the random orders (printed at start) |
| `--progress PATH` | `output.txt` | HPWL of every improvement found |
| `--replace-script PATH` | `case5r.m` | plotting script after replacement |
| `--transform-script PATH` | `case5t.m` | plotting script after transform |
| `--result PATH` | `case05-output.txt` | final result file |

The command prints its progress to standard output. The result file starts with
`HPWL <value>` and `SOFTMODULE <count>`. Then it lists each module's name, the number
of corners in its outline (4 or 6), and those corners, one `x y` per line.

The plotting scripts are MATLAB/Octave text. They fill the chip, the free tiles, the
fixed modules and, when the placement is legal, the soft modules with their names. The
package writes these scripts but does not draw or display anything itself.

## Library use

- `tilefloor.geometry`: `Point` and `Rect`, the latter with `width`, `height`,
  `area`, `mid` and `aspect_ratio`.
- `tilefloor.tiles`: `Body`, `Tile`, `ShapedModule` and `Plane`. Point search is done
  with `go_to_point` and `find_tile`.
- `tilefloor.stitching`: `split_x`, `split_y`, `join_x`, `join_y`, `insert_tile`,
  `remove_tile` and `enumerate_white`.
- `tilefloor.cost`: `point_cost`, `module_cost`, wire-length helpers and the
  placement orderings (`insert_order`, `sort_by_area`, `sort_by_x`,
  `sort_white_tiles`).
- `tilefloor.areas`: `can_use_area`, which finds the free rectangle that can be grown
  from a point in one of four directions.
- `tilefloor.placement`: `shape_models`, `insert_soft_tiles` and `compute_hpwl`.
- `tilefloor.replace.replace` and `tilefloor.transform.transform`: the refinement
  passes over a list of `ShapedModule`s.
- `tilefloor.special.special_transform`: interlocks two single-tile modules that share
  a whole side. The command does not run it.
- `tilefloor.reader`: `read_design`, which returns a `Design`, and `build_modules`.
- `tilefloor.report`: `outline`, `matlab_script` and `write_result`.
- `tilefloor.cli`: `optimize`, `total_module_hpwl` and `main`.

Example:

```python
import random

from tilefloor.cli import optimize, total_module_hpwl
from tilefloor.reader import build_modules, read_design
from tilefloor.replace import replace

design = read_design("placement.pl", "circuit.nodes", "input.txt")
best, improvements = optimize(design, iterations=1000, rng=random.Random(1))

modules = build_modules(best.soft_tiles, design.fixed_tiles)
replace(best, modules, design.fixed_tiles)
print(total_module_hpwl(modules, design.fixed_tiles))
```