from src.ems_payroll.ems_payroll.main import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config.get("DEBUG", False), port=5000)
