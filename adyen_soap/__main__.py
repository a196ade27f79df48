from adyen_soap.cli import main

main()
