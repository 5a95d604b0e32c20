from falling_sand.app import main

if __name__ == "__main__":
    main()
