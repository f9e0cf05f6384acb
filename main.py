#!/usr/bin/env python3
"""
CornellRoom - A Python Ray Tracer

Main entry point for rendering the Cornell room.
"""

import argparse
import sys
import threading
import time
from pathlib import Path

from cornellroom.options import RenderOptions, MirrorWall, SecondLightPlacement
from cornellroom.options_parser import OptionsParseError, load_options
from cornellroom.renderer import Renderer, RenderCancelledError, save_image


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='CornellRoom - A Python Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output room.png
  python main.py --width 640 --height 480 --samples 16 --mirror-wall back
  python main.py --config options.yaml --transparent-spheres --second-light floor
        '''
    )

    wall_choices = [m.value for m in MirrorWall]
    light_choices = [p.value for p in SecondLightPlacement]

    parser.add_argument('--config', type=str, help='YAML or JSON options file')
    parser.add_argument('--width', type=int, help='Image width (default: 1024)')
    parser.add_argument('--height', type=int, help='Image height (default: 768)')
    parser.add_argument('--samples', type=int, help='Samples per pixel (default: 1)')
    parser.add_argument('--depth', type=int, help='Max recursion depth (default: 4)')
    parser.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    parser.add_argument('--mirror-spheres', action='store_true', default=None,
                        help='Give the left sphere a mirror material')
    parser.add_argument('--mirror-cubes', action='store_true', default=None,
                        help='Give the left cube a mirror material')
    parser.add_argument('--transparent-spheres', action='store_true', default=None,
                        help='Make the right sphere glass')
    parser.add_argument('--transparent-cubes', action='store_true', default=None,
                        help='Make the right cube glass')
    parser.add_argument('--mirror-wall', type=str, choices=wall_choices,
                        help='Wall to turn into a mirror (default: none)')
    parser.add_argument('--second-light', type=str, choices=light_choices,
                        help='Placement of a second light (default: none)')
    parser.add_argument('--output', type=str, default='output/cornell.png', help='Output filename')
    return parser


def options_from_args(args: argparse.Namespace) -> RenderOptions:
    """Merge an optional options file with command-line overrides."""
    base = load_options(args.config) if args.config else RenderOptions()

    overrides = {
        'width': args.width,
        'height': args.height,
        'samples_per_pixel': args.samples,
        'max_depth': args.depth,
        'mirror_spheres': args.mirror_spheres,
        'mirror_cubes': args.mirror_cubes,
        'transparent_spheres': args.transparent_spheres,
        'transparent_cubes': args.transparent_cubes,
        'mirror_wall': args.mirror_wall,
        'second_light': args.second_light,
    }
    fields = dict(vars(base))
    fields.update({k: v for k, v in overrides.items() if v is not None})
    return RenderOptions(**fields)


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        options = options_from_args(args)
    except (OptionsParseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Print header
    print("=" * 60)
    print("CornellRoom Ray Tracer")
    print("=" * 60)

    renderer = Renderer(num_threads=args.threads)

    print(f"\nRender Settings:")
    print(f"  Resolution: {options.width}x{options.height}")
    print(f"  Samples: {options.samples_per_pixel}")
    print(f"  Max Depth: {options.max_depth}")
    print(f"  Threads: {renderer.num_threads}")
    print(f"  Mirror wall: {options.mirror_wall.value}")
    print(f"  Second light: {options.second_light.value}")

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '#' * filled + '-' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    cancel_event = threading.Event()

    print("\nRendering...")
    start_time = time.time()

    try:
        image = renderer.render(options, cancel_event)
    except KeyboardInterrupt:
        cancel_event.set()
        print("\nRender cancelled", file=sys.stderr)
        return 130
    except RenderCancelledError as e:
        print(f"\n{e}", file=sys.stderr)
        return 130

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Rays per second: {(options.width * options.height * max(1, options.samples_per_pixel)) / elapsed:.0f}")

    # Ensure output directory exists
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    save_image(image, str(output_path))

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
