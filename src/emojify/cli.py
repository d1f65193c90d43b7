"""CLI for emojify: ``emojify run``, ``emojify classify`` and ``emojify render-assets``."""

import argparse
import logging
import sys
from typing import List, Optional

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emojify",
        description="Overlay expression-matched emoji on the faces in a picture",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  emojify run photo.jpg -o out.png                 # Rendered emoji
  emojify run photo.jpg -o out.png --assets emoji/ # Emoji PNGs from a directory
  emojify classify --smile 0.8 --left 0.2 --right 0.9
  emojify render-assets emoji/ --size 512
""",
    )
    sub = parser.add_subparsers(dest="command")

    # emojify run
    run_p = sub.add_parser("run", help="Detect faces and overlay emoji")
    run_p.add_argument("input", help="Path to the input picture")
    run_p.add_argument(
        "-o", "--output",
        required=True,
        help="Path for the annotated picture",
    )
    run_p.add_argument(
        "--assets",
        default=None,
        help="Directory of emoji PNGs (default: config, then ~/.emojify/assets, then rendered)",
    )
    run_p.add_argument(
        "--config",
        default=None,
        metavar="PATH",
        help="Path to an emojify config YAML file",
    )
    run_p.add_argument("--smile-threshold", type=float, default=None)
    run_p.add_argument("--eye-threshold", type=float, default=None)
    run_p.add_argument("--scale", type=float, default=None, help="Emoji scale factor")
    run_p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    # emojify classify
    cls_p = sub.add_parser("classify", help="Print the emoji for a set of probabilities")
    cls_p.add_argument("--smile", type=float, required=True, help="Smiling probability")
    cls_p.add_argument("--left", type=float, required=True, help="Left eye open probability")
    cls_p.add_argument("--right", type=float, required=True, help="Right eye open probability")
    cls_p.add_argument("--config", default=None, metavar="PATH")
    cls_p.add_argument("-v", "--verbose", action="store_true")

    # emojify render-assets
    render_p = sub.add_parser("render-assets", help="Write rendered emoji PNGs")
    render_p.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Output directory (default: ~/.emojify/assets)",
    )
    render_p.add_argument("--size", type=int, default=256, help="Emoji size in pixels")
    render_p.add_argument("-v", "--verbose", action="store_true")

    return parser


def _load_config(args: argparse.Namespace):
    """Config from --config, with command-line threshold overrides applied."""
    from emojify.config import EmojifyConfig

    if args.config:
        config = EmojifyConfig.from_yaml(args.config)
    else:
        config = EmojifyConfig()

    overrides = {}
    if getattr(args, "smile_threshold", None) is not None:
        overrides["smiling_threshold"] = args.smile_threshold
    if getattr(args, "eye_threshold", None) is not None:
        overrides["eye_open_threshold"] = args.eye_threshold
    if getattr(args, "scale", None) is not None:
        overrides["scale_factor"] = args.scale
    if overrides:
        config = EmojifyConfig.from_dict({**config.to_dict(), **overrides})
    return config


def _make_resolver(assets: Optional[str], config):
    from emojify.assets import DirectoryAssetResolver, RenderedAssetResolver

    directory = assets or config.find_assets_dir()
    if directory:
        logger.debug("Using emoji assets from %s", directory)
        return DirectoryAssetResolver(directory)
    return RenderedAssetResolver(config.emoji_size)


def _cmd_run(args: argparse.Namespace) -> None:
    """Handle ``emojify run``."""
    import cv2

    from emojify.backends.haar import HaarCascadeBackend
    from emojify.emojifier import Emojifier, RecordingNotifier

    config = _load_config(args)
    resolver = _make_resolver(args.assets, config)

    picture = cv2.imread(args.input, cv2.IMREAD_UNCHANGED)
    if picture is None:
        raise IOError(f"Cannot read image: {args.input}")

    # Notices are printed below instead of logged
    notifier = RecordingNotifier()
    with Emojifier(HaarCascadeBackend(), resolver, config=config, notifier=notifier) as emojifier:
        result = emojifier.detect_faces_and_overlay_emoji(picture)

    for notice in notifier.notices:
        print(notice.message)

    if not cv2.imwrite(args.output, result.image):
        raise IOError(f"Cannot write image: {args.output}")

    for face, category in zip(result.faces, result.categories):
        g = face.geometry
        print(f"  face at ({g.x:.0f}, {g.y:.0f}) {g.width:.0f}x{g.height:.0f} -> {category.name}")
    print(f"\nDone: {result.face_count} faces, saved to {args.output}")


def _cmd_classify(args: argparse.Namespace) -> None:
    """Handle ``emojify classify``."""
    from emojify.selector import EmojiSelector
    from emojify.types import FaceSignals

    config = _load_config(args)
    signals = FaceSignals(
        smiling_probability=args.smile,
        left_eye_open_probability=args.left,
        right_eye_open_probability=args.right,
    )
    print(EmojiSelector.from_config(config).select(signals).name)


def _cmd_render_assets(args: argparse.Namespace) -> None:
    """Handle ``emojify render-assets``."""
    from emojify.assets import write_assets
    from emojify.config import default_assets_dir

    directory = args.directory or default_assets_dir()
    paths = write_assets(directory, size=args.size)
    print("Created files:")
    for p in paths:
        print(f"  {p}")


def main(argv: Optional[List[str]] = None):
    """Entry point for ``emojify`` CLI."""
    import cv2

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    try:
        if args.command == "run":
            _cmd_run(args)
        elif args.command == "classify":
            _cmd_classify(args)
        elif args.command == "render-assets":
            _cmd_render_assets(args)
    except (OSError, ValueError, RuntimeError, ImportError, AttributeError, cv2.error) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
