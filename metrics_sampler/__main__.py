from metrics_sampler.main import run

if __name__ == "__main__":
    run()
