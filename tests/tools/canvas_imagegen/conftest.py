import os
import sys

PLUGIN_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "tools", "canvas_imagegen")
)

# the plugin daemon runs with the plugin directory as cwd; mirror that for imports
if PLUGIN_DIR not in sys.path:
    sys.path.insert(0, PLUGIN_DIR)
