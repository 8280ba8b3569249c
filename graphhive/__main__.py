from graphhive.cli import main

raise SystemExit(main())
