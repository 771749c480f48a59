from waitdeps.main import main

raise SystemExit(main())
