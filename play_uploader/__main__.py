from play_uploader.cli import main

raise SystemExit(main())
