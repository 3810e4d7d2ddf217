from decodeways.cli import main

raise SystemExit(main())
