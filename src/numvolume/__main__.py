from numvolume.cli import main

raise SystemExit(main())
