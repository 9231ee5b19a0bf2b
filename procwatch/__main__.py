from procwatch.app import main

raise SystemExit(main())
