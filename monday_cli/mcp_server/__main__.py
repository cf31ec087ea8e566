from monday_cli.mcp_server import main

main()
