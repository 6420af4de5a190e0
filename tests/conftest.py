import sys
from pathlib import Path

# Add repo root to path for `src` imports
sys.path.insert(0, str(Path(__file__).parent.parent))
