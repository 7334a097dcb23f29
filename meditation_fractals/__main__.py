"""
Allow running the package directly: python -m meditation_fractals
Or from inside the folder: python __main__.py
"""
import logging
import os
import sys
from argparse import ArgumentParser, ArgumentTypeError


def parse_complex(text):
    """Parse 're,im' or a Python complex literal such as '-0.8+0.156j'."""
    try:
        if ',' in text:
            real, imag = text.split(',')
            return complex(float(real), float(imag))
        return complex(text.replace(' ', ''))
    except ValueError:
        raise ArgumentTypeError(f"not a complex number: {text!r}")


def build_parser():
    parser = ArgumentParser(prog='meditation_fractals',
                            description='Continuously animated Mandelbrot and Julia sets.')
    parser.add_argument('--width', type=int, help='window width in pixels')
    parser.add_argument('--height', type=int, help='window height in pixels')
    parser.add_argument('--fractal', choices=('mandelbrot', 'julia'), default='mandelbrot',
                        help='fractal to show first')
    parser.add_argument('--settings', metavar='PATH', help='settings.json to load instead of the packaged one')
    parser.add_argument('--no-audio', dest='audio', action='store_false',
                        help='run without the ambient drone')
    parser.add_argument('--paused', dest='autostart', action='store_false',
                        help='open on a still frame; press SPACE to start')
    parser.add_argument('--julia-c', dest='julia_c', type=parse_complex, metavar='RE,IM',
                        help='hold the Julia parameter fixed, e.g. --julia-c=-0.8,0.156')
    parser.add_argument('--verbose', '-v', action='store_true', help='enable debug logging')
    return parser


def main(argv=None):
    from meditation_fractals.app import run
    from meditation_fractals.config import load_settings

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    settings = load_settings(args.settings)
    run(settings, args.width, args.height, args.fractal,
        enable_audio=args.audio, autostart=args.autostart, julia_c=args.julia_c)


# Handle both direct execution and module execution
if __name__ == "__main__":
    if not __package__:
        # When run directly, add parent directory to path for imports
        sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    main()
