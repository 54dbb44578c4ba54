import sys
from pathlib import Path

# Repo root on sys.path so `import meteo_core...` works without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
