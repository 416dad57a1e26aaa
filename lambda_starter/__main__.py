from lambda_starter.cli import main

main()
