from mapconst.cli import main

raise SystemExit(main())
