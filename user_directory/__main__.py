from user_directory.main import main

raise SystemExit(main())
