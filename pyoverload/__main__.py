from pyoverload.cmdline import main

if __name__ == '__main__':
    main()
