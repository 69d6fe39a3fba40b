from template_library_client.cli import main

raise SystemExit(main())
