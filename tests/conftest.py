import sys
from pathlib import Path

# Repository root on sys.path so `import atsconvert` works without installing the package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
