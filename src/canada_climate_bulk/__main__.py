from canada_climate_bulk.main import main

main()
