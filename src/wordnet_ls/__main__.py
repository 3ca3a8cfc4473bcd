import sys

from wordnet_ls.cli import main

sys.exit(main())
