from gemma.cli import main

raise SystemExit(main())
