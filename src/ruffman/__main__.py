from ruffman.cli import main

raise SystemExit(main())
