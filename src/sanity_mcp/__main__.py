from sanity_mcp.app import main

main()
