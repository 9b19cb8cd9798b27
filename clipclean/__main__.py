def run():
    from clipclean.clipclean import main

    main()
    return 0


if __name__ == '__main__':
    run()
