"""Replay a GPX file into an in-memory host, printing each emitted fix."""

import sys
from pathlib import Path

from gpxreplay import InMemoryLocationHost, LocationMocker, PlaybackState, QueueDispatcher


def main() -> None:
    if len(sys.argv) < 2:
        print("usage: python replay_file.py TRACK.gpx [SPEED]")
        return

    document = Path(sys.argv[1]).read_text(encoding="utf-8")
    speed = float(sys.argv[2]) if len(sys.argv) > 2 else 10.0

    host = InMemoryLocationHost()
    dispatcher = QueueDispatcher()

    with LocationMocker(host, dispatcher=dispatcher) as mocker:
        mocker.add_sink(
            lambda e: print(f"  {e.get('time', '--')}  {e['latitude']:.6f}, {e['longitude']:.6f}")
        )
        result = mocker.handle("startMockingWithGpx", {"gpxData": document, "playbackSpeed": speed})
        if not result.success:
            print(f"Could not start: {result.error_code}: {result.message}")
            return

        # Deliveries run here, on the main thread
        while mocker.state is not PlaybackState.IDLE or dispatcher.pending:
            dispatcher.run_pending(timeout=0.5)

    print(f"\n{len(host.fixes)} fixes injected")


if __name__ == "__main__":
    main()
