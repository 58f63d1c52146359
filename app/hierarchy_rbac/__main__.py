from hierarchy_rbac.cli import main

raise SystemExit(main())
