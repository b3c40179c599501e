import sys
from medianstream.app import main

sys.exit(main())
