from blobtour.main import main

raise SystemExit(main())
