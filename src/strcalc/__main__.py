from strcalc.cli import main

raise SystemExit(main())
