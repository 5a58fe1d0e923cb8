import sys

from deptree_rdf.main import main

sys.exit(main())
