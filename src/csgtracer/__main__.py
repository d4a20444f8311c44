# __main__.py
import sys

from csgtracer.main import main

sys.exit(main())
