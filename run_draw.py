"""
Interactive loop drawing demo.

Drag with the left mouse button to draw a loop over a blank map viewport.

Keys:
    c  clear the loop
    r  retry the map connection (offline mode)
    d  dismiss the offline banner
    s  save the current frame and state to ./runs/draw/<timestamp>
    q  quit

Pass --offline to skip the map-ready signal and watch the timeout fall
back to offline mode.
"""

import argparse
import json
import logging

import cv2
import numpy as np
import supervision as sv

from geoloop_cli.cli import camera_from_config, get_target_run_folder
from geoloop_draw import GeoloopConfig, GestureDrawingController, LoopVisualizer, ScreenPoint

WINDOW_NAME = "geoloop"

logger = logging.getLogger(__name__)


class MouseGestureAdapter:
    """
    Translates OpenCV mouse callbacks into pan gestures.

    Design: keeps cv2 specifics out of the controller.
    """

    def __init__(self, controller: GestureDrawingController):
        self.controller = controller
        self._pressed = False

    def __call__(self, event: int, x: int, y: int, flags: int, param) -> None:
        point = ScreenPoint(x=float(x), y=float(y))

        if event == cv2.EVENT_LBUTTONDOWN:
            self._pressed = True
            self.controller.on_pan_start(point)
        elif event == cv2.EVENT_MOUSEMOVE and self._pressed:
            self.controller.on_pan_update(point)
        elif event == cv2.EVENT_LBUTTONUP and self._pressed:
            self._pressed = False
            self.controller.on_pan_end()


def blank_map(width: int, height: int) -> np.ndarray:
    """Light grid standing in for map tiles."""
    frame = np.full((height, width, 3), 235, dtype=np.uint8)
    for x in range(0, width, 64):
        cv2.line(frame, (x, 0), (x, height), (210, 210, 210), 1)
    for y in range(0, height, 64):
        cv2.line(frame, (0, y), (width, y), (210, 210, 210), 1)
    return frame


def save_snapshot(frame: np.ndarray, controller: GestureDrawingController) -> None:
    run_folder = get_target_run_folder(application_name="draw")
    with sv.ImageSink(target_dir_path=run_folder) as sink:
        sink.save_image(image=frame, image_name="frame.png")
    with open(f"{run_folder}/state.json", "w") as f:
        json.dump(controller.session.state.to_dict(), f, indent=2)
    print(f"Snapshot saved to {run_folder}")


def run(config: GeoloopConfig, offline: bool) -> None:
    camera = camera_from_config(config)
    controller = GestureDrawingController(transform=camera, config=config.drawing)
    visualizer = LoopVisualizer.from_config(config.render)
    width, height = config.map_view.viewport_wh
    background = blank_map(width, height)

    cv2.namedWindow(WINDOW_NAME)
    cv2.setMouseCallback(WINDOW_NAME, MouseGestureAdapter(controller))

    if not offline:
        controller.session.set_map_ready()

    try:
        while True:
            frame = visualizer.draw_session(background.copy(), controller, camera)
            cv2.imshow(WINDOW_NAME, frame)

            key = cv2.waitKey(30) & 0xFF
            if key == ord("q"):
                break
            elif key == ord("c"):
                controller.clear()
            elif key == ord("r"):
                controller.retry()
            elif key == ord("d"):
                controller.dismiss_banner()
            elif key == ord("s"):
                save_snapshot(frame, controller)
    finally:
        controller.dispose()
        cv2.destroyAllWindows()

    polygon = controller.session.polygon
    if polygon:
        print(json.dumps([p.to_dict() for p in polygon], indent=2))


def main():
    parser = argparse.ArgumentParser(description="Draw a loop on a map with the mouse")
    parser.add_argument("--config", help="Path to geoloop config YAML")
    parser.add_argument("--offline", action="store_true", help="Never signal map ready")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    config = GeoloopConfig.from_yaml(args.config) if args.config else GeoloopConfig()
    logger.info(f"Viewport {config.map_view.viewport_wh}, zoom {config.map_view.zoom}")
    run(config, offline=args.offline)


if __name__ == "__main__":
    main()
