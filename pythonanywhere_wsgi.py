import sys
import os

# Add your project directory to the sys.path
project_home = '/home/YOUR_USERNAME/bakery-costing'
if project_home not in sys.path:
    sys.path.insert(0, project_home)

# Set the working directory
os.chdir(project_home)

os.environ.setdefault('FLASK_ENV', 'production')

# Import your Flask app
from app import app as application
