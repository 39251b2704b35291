"""
Script: check_detection.py
Description: Standalone check of camera capture and the Gemini calls
Author: Hackathon Team
Date: 2026

Usage:
    python scripts/check_detection.py                  # live camera, 'd' to detect
    python scripts/check_detection.py --image a.jpg    # detect a single image
    python scripts/check_detection.py --translate --speak
    python scripts/check_detection.py --list           # show usable camera indices
"""
import os
import sys
import asyncio
import argparse
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import cv2

import config
from asl_translator.core.errors import TranslatorError
from asl_translator.core.gemini_service import create_service
from asl_translator.core.state import TARGET_LANGUAGES
from asl_translator.utils.audio_utils import AudioPlayer
from asl_translator.utils.video_utils import VideoCapture, encode_jpeg, list_cameras

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)


async def run_checks(service, image: bytes, translate: bool, speak: bool) -> None:
    symbol = await service.detect(image)
    print(f"Detected: {symbol or '(no sign)'}")

    if not symbol:
        return

    if translate:
        results = await asyncio.gather(
            *(service.translate(symbol, language.value) for language in TARGET_LANGUAGES)
        )
        for language, text in zip(TARGET_LANGUAGES, results):
            print(f"  {language.value}: {text}")

    if speak:
        audio = await service.synthesize(symbol)
        print(f"  Received {len(audio)} bytes of audio")
        await asyncio.to_thread(AudioPlayer().play, audio)


def print_cameras() -> None:
    cameras = list_cameras()
    if not cameras:
        print("No cameras found")
        return
    for index in cameras:
        print(f"Camera {index}")


def check_image(service, path: str, args) -> None:
    frame = cv2.imread(path)
    if frame is None:
        print(f"Error: Could not read image {path}")
        return
    asyncio.run(run_checks(service, encode_jpeg(frame), args.translate, args.speak))


def check_camera(service, args) -> None:
    camera = VideoCapture(camera_index=args.camera)
    try:
        camera.open()
    except TranslatorError as e:
        print(f"Error: {e}")
        return

    print("Camera opened. Press 'd' to detect the current frame, 'q' to quit.")

    image = None
    try:
        while image is None:
            frame = camera.get_latest_frame()
            if frame is not None:
                cv2.imshow('Sign Detection Check', cv2.flip(frame, 1))

            key = cv2.waitKey(30) & 0xFF
            if key == ord('q'):
                return
            if key == ord('d') and camera.has_frame:
                image = camera.get_frame()
    finally:
        camera.release()
        cv2.destroyAllWindows()

    asyncio.run(run_checks(service, image, args.translate, args.speak))


def main():
    parser = argparse.ArgumentParser(description='Check camera capture and Gemini sign detection')
    parser.add_argument('--camera', type=int, default=config.CAMERA_INDEX, help='Camera index')
    parser.add_argument('--image', type=str, default=None, help='Detect from an image file instead')
    parser.add_argument('--translate', action='store_true', help='Also translate the detected sign')
    parser.add_argument('--list', action='store_true', help='List usable camera indices and exit')
    parser.add_argument('--speak', action='store_true', help='Also synthesize and play speech')
    args = parser.parse_args()

    if args.list:
        print_cameras()
        return

    try:
        service = create_service()
    except TranslatorError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        if args.image:
            check_image(service, args.image, args)
        else:
            check_camera(service, args)
    except TranslatorError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
