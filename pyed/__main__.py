from pyed.main import main

raise SystemExit(main())
