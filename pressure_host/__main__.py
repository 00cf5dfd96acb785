from pressure_host.main import main

main()
