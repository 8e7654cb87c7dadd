from bannerseed.cli import main

raise SystemExit(main())
