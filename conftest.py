import sys
import os

# Add the project root directory to the Python path
# This allows pytest to import the 'hscan' package without installing it,
# even when tests are run from a subfolder.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__)))
sys.path.insert(0, PROJECT_ROOT)
