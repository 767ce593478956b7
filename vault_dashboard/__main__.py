from vault_dashboard.dashboard import main

main()
