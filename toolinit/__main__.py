from toolinit.cli import main

raise SystemExit(main())
