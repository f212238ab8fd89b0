from metrics_report.main import main

if __name__ == "__main__":
    main()
