"""
geoloop CLI - Main entry point.

Measures distances, tests containment and replays recorded gestures
through a GestureDrawingController.
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import supervision as sv
import yaml

from geoloop_logging import LogEvent, create_logger
from geoloop_draw import (
    DistanceCalculator,
    GeoPoint,
    GeoloopConfig,
    GeometryUtils,
    GestureDrawingController,
    LoopVisualizer,
    ScreenPoint,
    WebMercatorCamera,
)

logger = logging.getLogger(__name__)


def load_yaml_config(config_path: str) -> Any:
    """
    Load a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is invalid
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")


def get_target_run_folder(application_name: str) -> str:
    # runs is datetime generated folder in the application name folder
    target_run_folder = f"./runs/{application_name}/{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    os.makedirs(target_run_folder, exist_ok=True)
    return target_run_folder


def configure_logging(level_name: str) -> None:
    """Apply one level to the CLI logger and every geoloop.* structured logger."""
    level = getattr(logging, level_name.upper())
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)

    logging.getLogger("geoloop").setLevel(level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("geoloop."):
            logging.getLogger(name).setLevel(level)


def load_polygon(polygon_path: str) -> List[GeoPoint]:
    """
    Load polygon vertices from YAML.

    Accepts a list of ``{lat, lon}`` mappings or ``[lat, lon]`` pairs,
    optionally under a top-level ``polygon`` key.
    """
    data = load_yaml_config(polygon_path)
    if isinstance(data, dict):
        data = data.get("polygon", [])
    if not isinstance(data, list):
        raise ValueError(f"Polygon must be a list of points, got {type(data).__name__}")
    return [GeoPoint.from_dict(vertex) for vertex in data]


def replay_gesture(
    gesture: Dict[str, Any],
    config: GeoloopConfig,
) -> GestureDrawingController:
    """
    Replay recorded pan events through a fresh controller.

    Gesture YAML:
        map_ready: true
        events:
          - {type: start, x: 200, y: 200}
          - {type: move, x: 400, y: 220}
          - {type: end}

    Returns:
        The controller (caller disposes it)
    """
    camera = camera_from_config(config)
    controller = GestureDrawingController(transform=camera, config=config.drawing)

    if gesture.get("map_ready", True):
        controller.session.set_map_ready()

    try:
        for index, event in enumerate(gesture.get("events", [])):
            event_type = event.get("type")
            if event_type == "start":
                controller.on_pan_start(ScreenPoint(x=float(event["x"]), y=float(event["y"])))
            elif event_type == "move":
                controller.on_pan_update(ScreenPoint(x=float(event["x"]), y=float(event["y"])))
            elif event_type == "end":
                controller.on_pan_end()
            elif event_type == "clear":
                controller.clear()
            else:
                raise ValueError(f"Unknown gesture event type at index {index}: {event_type!r}")
    except Exception:
        controller.dispose()
        raise

    return controller


def camera_from_config(config: GeoloopConfig) -> WebMercatorCamera:
    view = config.map_view
    return WebMercatorCamera(
        center=view.center_point,
        zoom=view.zoom,
        viewport_wh=view.viewport_wh,
        tile_size=view.tile_size,
    )


def render_controller(
    controller: GestureDrawingController,
    config: GeoloopConfig,
    output_path: str,
) -> str:
    """Render the overlay on a blank viewport-sized frame and write it."""
    width, height = config.map_view.viewport_wh
    frame = np.full((height, width, 3), 255, dtype=np.uint8)

    visualizer = LoopVisualizer.from_config(config.render)
    frame = visualizer.draw_session(frame, controller, camera_from_config(config))

    target = Path(output_path)
    with sv.ImageSink(target_dir_path=str(target.parent)) as sink:
        sink.save_image(image=frame, image_name=target.name)
    return output_path


def run_distance(args: argparse.Namespace) -> None:
    a = GeoPoint(lat=args.lat1, lon=args.lon1)
    b = GeoPoint(lat=args.lat2, lon=args.lon2)
    meters = GeometryUtils.distance(a, b, DistanceCalculator(args.calculator))
    print(f"{meters:.3f}")


def run_contains(args: argparse.Namespace) -> None:
    polygon = load_polygon(args.polygon)
    point = GeoPoint(lat=args.lat, lon=args.lon)
    print("inside" if GeometryUtils.point_in_polygon(point, polygon) else "outside")


def run_replay(args: argparse.Namespace) -> None:
    config = GeoloopConfig.from_yaml(args.config) if args.config else GeoloopConfig()
    gesture = load_yaml_config(args.gesture) or {}
    if not isinstance(gesture, dict):
        raise ValueError(f"Gesture file must be a mapping, got {type(gesture).__name__}")

    controller = replay_gesture(gesture, config)
    try:
        result = {
            'state': controller.session.state.to_dict(),
            'was_dragged': controller.session.was_dragged,
            'polygon_vertices': len(controller.session.polygon),
        }

        render_path = args.render
        if args.save_run:
            run_folder = get_target_run_folder(application_name="replay")
            render_path = render_path or f"{run_folder}/loop.png"
            with open(f"{run_folder}/state.json", "w") as f:
                json.dump(result, f, indent=2)

        if render_path:
            result['render'] = render_controller(controller, config, render_path)

        create_logger("cli").info(
            event=LogEvent.CLI_REPLAY_FINISHED,
            message="Gesture replay finished",
            metadata={'status': result['state']['status'], 'points': result['polygon_vertices']}
        )
        print(json.dumps(result, indent=2))
    finally:
        controller.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geoloop-cli",
        description="geoloop CLI - Measure, test and replay drawn map loops",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Distance in meters (WGS84 ellipsoid by default)
  geoloop-cli distance 51.5 -0.1 51.6 -0.2
  geoloop-cli distance 51.5 -0.1 51.6 -0.2 --calculator haversine

  # Point-in-polygon test
  geoloop-cli contains polygon.yaml 51.5 -0.12

  # Replay a recorded gesture and render it
  geoloop-cli replay gesture.yaml --config geoloop.yaml --render loop.png
"""
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    distance = subparsers.add_parser('distance', help='Distance between two geocoordinates')
    distance.add_argument('lat1', type=float)
    distance.add_argument('lon1', type=float)
    distance.add_argument('lat2', type=float)
    distance.add_argument('lon2', type=float)
    distance.add_argument(
        '--calculator',
        default=DistanceCalculator.GEODESIC.value,
        choices=[c.value for c in DistanceCalculator],
        help='Distance algorithm (default: geodesic)'
    )

    contains = subparsers.add_parser('contains', help='Test a point against a polygon YAML')
    contains.add_argument('polygon', help='Path to polygon YAML')
    contains.add_argument('lat', type=float)
    contains.add_argument('lon', type=float)

    replay = subparsers.add_parser('replay', help='Replay a recorded gesture YAML')
    replay.add_argument('gesture', help='Path to gesture YAML')
    replay.add_argument('--config', help='Path to geoloop config YAML')
    replay.add_argument('--render', help='Write the rendered overlay to this image path')
    replay.add_argument(
        '--save-run',
        action='store_true',
        help='Store state.json (and the render) in ./runs/replay/<timestamp>'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.log_level)

    handlers = {
        'distance': run_distance,
        'contains': run_contains,
        'replay': run_replay,
    }

    try:
        handlers[args.command](args)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
