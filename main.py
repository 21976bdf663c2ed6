"""
3D Boids Simulation
===================

Flocking boids in a wrap-around box, steering around obstacles.

Controls:
    - W/S: Rotate camera up/down
    - A/D: Rotate camera left/right
    - Q/E: Zoom in/out
    - Mouse drag: Rotate camera
    - Mouse wheel: Zoom
    - F: Toggle follow / free camera
    - 1-5: Raise align/cohere/separate/avoid/center weight (Shift lowers)
    - +/-: Speed factor
    - V: Toggle field of view
    - K: Toggle keep-to-center
    - B: Show bounds walls
    - ESC: Quit
"""

from core import Application


def main():
    app = Application()
    app.run()


if __name__ == "__main__":
    main()
