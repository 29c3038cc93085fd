from trajsim.run import main

main()
